from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Category(BaseModel):
    name: str


class Board(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    bump_limit: Optional[int] = Field(default=None, exclude=True)


class Thread(BaseModel):
    post_num: int
    subject: Optional[str] = None
    author: str
    post_time: datetime
    num_replies: int
    latest_reply_time: Optional[datetime] = None
    comment: str
    # listing position after the bump limit is applied; never sent to clients
    sort_time: Optional[datetime] = Field(default=None, exclude=True)


class Post(BaseModel):
    post_num: int
    author: str
    time: datetime
    comment: str


class BoardReply(BaseModel):
    board: Board
    threads: list[Thread]


class ThreadReply(BaseModel):
    op: Thread
    posts: list[Post]


class ThreadCreate(BaseModel):
    comment: str
    author: str
    subject: str = ""


class PostCreate(BaseModel):
    comment: str
    author: str


class PostNumReply(BaseModel):
    post_num: int
