from __future__ import annotations

import logging
from sqlite3 import Connection, Row
from typing import List, Optional

from ..errors import DataAccessError, NotFoundError, translate_errors
from ..models import BoardReply, Thread, ThreadReply
from .board_repo import get_board
from .post_repo import list_posts
from .utils import parse_db_time

logger = logging.getLogger(__name__)

# sort_time is the bump-limit rule:
#   no replies (or bump_limit <= 0)  -> the thread's own time
#   replies < bump_limit             -> latest reply time
#   replies >= bump_limit            -> time of this thread's bump_limit-th reply
#                                       (post_num order), so it stops bumping
_THREAD_SELECT = """
SELECT
    t.post_num,
    t.subject,
    t.author,
    t.time,
    t.comment,
    COUNT(c.id) AS num_replies,
    MAX(c.time) AS latest_reply,
    CASE
        WHEN COUNT(c.id) = 0 OR b.bump_limit <= 0 THEN t.time
        WHEN COUNT(c.id) < b.bump_limit THEN MAX(c.time)
        ELSE (
            SELECT n.time FROM comments n
            WHERE n.reply_to = t.id
              AND (
                  SELECT COUNT(*) FROM comments p
                  WHERE p.reply_to = t.id AND p.post_num < n.post_num
              ) = b.bump_limit - 1
        )
    END AS sort_time
FROM threads t
JOIN boards b ON b.id = t.board_id
LEFT JOIN comments c ON c.reply_to = t.id
"""


def _row_to_thread(r: Row) -> Thread:
    post_time = parse_db_time(r["time"])
    if post_time is None:
        raise DataAccessError(f"thread {r['post_num']} has no time")
    return Thread(
        post_num=r["post_num"],
        subject=r["subject"],
        author=r["author"],
        post_time=post_time,
        num_replies=r["num_replies"],
        latest_reply_time=parse_db_time(r["latest_reply"]),
        comment=r["comment"],
        sort_time=parse_db_time(r["sort_time"]),
    )


def list_threads(conn: Connection, board_name: str) -> List[Thread]:
    """Threads of a board, most recently bumped first."""
    with translate_errors(f"list threads of {board_name!r}"):
        rows = conn.execute(
            _THREAD_SELECT
            + " WHERE b.name = ? GROUP BY t.id ORDER BY sort_time DESC, t.post_num DESC",
            (board_name,),
        ).fetchall()
        return [_row_to_thread(r) for r in rows]


def get_board_threads(conn: Connection, board_name: str) -> BoardReply:
    board = get_board(conn, board_name)
    threads = list_threads(conn, board_name)
    logger.debug("board %s: %d threads", board_name, len(threads))
    return BoardReply(board=board, threads=threads)


def get_op(conn: Connection, board_name: str, thread_num: int) -> Thread:
    with translate_errors(f"get thread {board_name}/{thread_num}"):
        row = conn.execute(
            _THREAD_SELECT + " WHERE b.name = ? AND t.post_num = ? GROUP BY t.id",
            (board_name, thread_num),
        ).fetchone()
    if row is None:
        raise NotFoundError("thread", f"{board_name}/{thread_num}")
    return _row_to_thread(row)


def get_thread(conn: Connection, board_name: str, thread_num: int) -> ThreadReply:
    op = get_op(conn, board_name, thread_num)
    posts = list_posts(conn, board_name, thread_num)
    return ThreadReply(op=op, posts=posts)


def create_thread(
    conn: Connection,
    board_name: str,
    comment: str,
    author: str,
    subject: Optional[str] = "",
) -> int:
    """
    Insert a thread and return its post number.
    An empty subject is stored as NULL. An unknown board leaves board_id NULL,
    which the store rejects (ConstraintError).
    """
    with translate_errors(f"create thread on {board_name!r}"):
        rows = conn.execute(
            """
            INSERT INTO threads (board_id, post_num, comment, author, subject)
            VALUES (
                (SELECT id FROM boards WHERE name = ?),
                (SELECT COALESCE(MAX(bp.post_num), 0) + 1
                 FROM board_posts bp JOIN boards b ON b.id = bp.board_id
                 WHERE b.name = ?),
                ?,
                ?,
                NULLIF(?, '')
            )
            RETURNING post_num
            """,
            (board_name, board_name, comment, author, subject),
        ).fetchall()
    if not rows:
        raise DataAccessError(f"create thread on {board_name!r}: no post number returned")
    return rows[0]["post_num"]


def is_original_poster(conn: Connection, board_name: str, thread_num: int) -> bool:
    """
    True iff thread_num is a thread (not a reply) on board_name.

    Only existence is checked; no author is compared. The name is kept for
    compatibility with existing callers.
    """
    with translate_errors(f"check op {board_name}/{thread_num}"):
        row = conn.execute(
            """
            SELECT t.post_num
            FROM threads t
            JOIN boards b ON b.id = t.board_id
            WHERE b.name = ? AND t.post_num = ?
            """,
            (board_name, thread_num),
        ).fetchone()
    return row is not None
