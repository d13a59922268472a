from __future__ import annotations

from sqlite3 import Connection, Row
from typing import List

from ..errors import DataAccessError, translate_errors
from ..models import Post
from .utils import parse_db_time


def _row_to_post(r: Row) -> Post:
    t = parse_db_time(r["time"])
    if t is None:
        raise DataAccessError(f"post {r['post_num']} has no time")
    return Post(post_num=r["post_num"], author=r["author"], time=t, comment=r["comment"])


def list_posts(conn: Connection, board_name: str, thread_num: int) -> List[Post]:
    with translate_errors(f"list posts of {board_name}/{thread_num}"):
        rows = conn.execute(
            """
            SELECT c.post_num, c.author, c.time, c.comment
            FROM comments c
            JOIN threads t ON t.id = c.reply_to
            JOIN boards b ON b.id = t.board_id
            WHERE b.name = ? AND t.post_num = ?
            ORDER BY c.post_num ASC
            """,
            (board_name, thread_num),
        ).fetchall()
        return [_row_to_post(r) for r in rows]


def create_post(conn: Connection, board_name: str, thread_num: int, comment: str, author: str) -> int:
    """
    Append a reply to a thread and return its post number.
    If (board_name, thread_num) is not a thread, reply_to is NULL and the
    store rejects the row (ConstraintError); nothing is inserted.
    """
    with translate_errors(f"create post in {board_name}/{thread_num}"):
        rows = conn.execute(
            """
            INSERT INTO comments (reply_to, post_num, comment, author)
            VALUES (
                (SELECT t.id FROM threads t JOIN boards b ON b.id = t.board_id
                 WHERE b.name = ? AND t.post_num = ?),
                (SELECT COALESCE(MAX(bp.post_num), 0) + 1
                 FROM board_posts bp JOIN boards b ON b.id = bp.board_id
                 WHERE b.name = ?),
                ?,
                ?
            )
            RETURNING post_num
            """,
            (board_name, thread_num, board_name, comment, author),
        ).fetchall()
    if not rows:
        raise DataAccessError(f"create post in {board_name}/{thread_num}: no post number returned")
    return rows[0]["post_num"]
