# imageboard/services/board_svc.py
from __future__ import annotations

import logging

from ..db import get_conn
from ..logs import LogContext
from ..models import Board, BoardReply, Category, ThreadReply
from ..repository import board_repo, category_repo, post_repo, thread_repo

logger = logging.getLogger(__name__)


def list_categories() -> list[Category]:
    with get_conn() as conn:
        return category_repo.list_categories(conn)


def list_boards(category: str | None = None) -> list[Board]:
    with get_conn() as conn:
        if category is None:
            return board_repo.list_boards(conn)
        return board_repo.list_boards_by_category(conn, category)


def get_board(name: str) -> Board:
    with get_conn() as conn:
        return board_repo.get_board(conn, name)


def get_board_threads(name: str) -> BoardReply:
    with get_conn() as conn:
        return thread_repo.get_board_threads(conn, name)


def get_thread(board: str, thread_num: int) -> ThreadReply:
    with get_conn() as conn:
        return thread_repo.get_thread(conn, board, thread_num)


def is_original_poster(board: str, thread_num: int) -> bool:
    with get_conn() as conn:
        return thread_repo.is_original_poster(conn, board, thread_num)


def create_thread(board: str, comment: str, author: str, subject: str, log: LogContext) -> int:
    with get_conn() as conn:
        post_num = thread_repo.create_thread(conn, board, comment, author, subject)
        conn.commit()
    logger.info("created thread %s/%d by %s", board, post_num, author)
    log.set_entity("THREAD", f"{board}/{post_num}")
    log.set_after({"board": board, "post_num": post_num, "author": author, "subject": subject or None})
    return post_num


def create_post(board: str, thread_num: int, comment: str, author: str, log: LogContext) -> int:
    with get_conn() as conn:
        post_num = post_repo.create_post(conn, board, thread_num, comment, author)
        conn.commit()
    logger.info("created post %s/%d in thread %d by %s", board, post_num, thread_num, author)
    log.set_entity("POST", f"{board}/{post_num}")
    log.set_after({"board": board, "thread": thread_num, "post_num": post_num, "author": author})
    return post_num
