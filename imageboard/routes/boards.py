from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Path, Query

from ..errors import ConstraintError, NotFoundError, RepositoryError
from ..logs import LogContext
from ..models import (
    Board,
    BoardReply,
    Category,
    PostCreate,
    PostNumReply,
    ThreadCreate,
    ThreadReply,
)
from ..services.board_svc import (
    create_post,
    create_thread,
    get_board_threads,
    get_thread,
    is_original_poster,
    list_boards,
    list_categories,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/categories", response_model=list[Category])
def api_category_list():
    try:
        return list_categories()
    except RepositoryError as e:
        logger.warning("list categories failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/boards", response_model=list[Board])
def api_board_list(category: str | None = Query(None)):
    try:
        return list_boards(category)
    except RepositoryError as e:
        logger.warning("list boards (category=%s) failed: %s", category, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/boards/{board}", response_model=BoardReply)
def api_board_show(board: str):
    try:
        return get_board_threads(board)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RepositoryError as e:
        logger.warning("show board %s failed: %s", board, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/boards/{board}/threads/{post_num}", response_model=ThreadReply)
def api_thread_show(board: str, post_num: int = Path(..., ge=1)):
    try:
        return get_thread(board, post_num)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RepositoryError as e:
        logger.warning("show thread %s/%d failed: %s", board, post_num, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/boards/{board}/threads/{post_num}/op")
def api_thread_is_op(board: str, post_num: int = Path(..., ge=1)):
    try:
        return {"is_op": is_original_poster(board, post_num)}
    except RepositoryError as e:
        logger.warning("op check %s/%d failed: %s", board, post_num, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/boards/{board}/threads", response_model=PostNumReply, status_code=201)
def api_thread_create(board: str, body: ThreadCreate):
    log = LogContext("CREATE_THREAD", user=body.author)
    log.set_payload({"board": board, **body.model_dump()})
    try:
        post_num = create_thread(board, body.comment, body.author, body.subject, log)
        log.write("OK")
        return {"post_num": post_num}
    except ConstraintError as e:
        logger.warning("create thread on %s rejected: %s", board, e)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=f"board_not_found: {board}")
    except RepositoryError as e:
        logger.warning("create thread on %s failed: %s", board, e)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/boards/{board}/threads/{post_num}/posts", response_model=PostNumReply, status_code=201)
def api_post_create(board: str, body: PostCreate, post_num: int = Path(..., ge=1)):
    log = LogContext("CREATE_POST", user=body.author)
    log.set_payload({"board": board, "thread": post_num, **body.model_dump()})
    try:
        new_num = create_post(board, post_num, body.comment, body.author, log)
        log.write("OK")
        return {"post_num": new_num}
    except ConstraintError as e:
        logger.warning("create post in %s/%d rejected: %s", board, post_num, e)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=f"thread_not_found: {board}/{post_num}")
    except RepositoryError as e:
        logger.warning("create post in %s/%d failed: %s", board, post_num, e)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
