"""
FastAPI app entry point aggregating the routers under imageboard/routes.
Run with `uvicorn imageboard.api:app`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .db import ensure_schema, get_conn, get_cors_origins
from .logs import ensure_log_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    with get_conn() as conn:
        ensure_schema(conn)
    ensure_log_schema()
    logger.info("board store schema ready")
    yield


app = FastAPI(title="imageboard-api", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
from .routes import base as base_routes
from .routes import boards as board_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(board_routes.router)
app.include_router(logs_routes.router)
