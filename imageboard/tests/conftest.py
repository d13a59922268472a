import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "imageboard_test.db"
    # Point the store to this temp DB
    os.environ["BOARD_DB_PATH"] = str(path)
    schema = Path(_PROJECT_ROOT / "imageboard" / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    from imageboard.logs import ensure_log_schema
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from imageboard.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("BOARD_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["comments", "threads", "boards", "categories", "operation_log"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def conn(tmp_db_path):
    from imageboard.db import get_conn
    with get_conn() as c:
        yield c


class Seeder:
    """Raw inserts with explicit post numbers and times, bypassing the repository."""

    def __init__(self, conn):
        self.conn = conn

    def category(self, name):
        self.conn.execute("INSERT INTO categories(name) VALUES(?)", (name,))

    def board(self, name, description=None, category=None, bump_limit=300):
        self.conn.execute(
            "INSERT INTO boards(name, description, category, bump_limit) "
            "VALUES(?, ?, (SELECT id FROM categories WHERE name=?), ?)",
            (name, description, category, bump_limit),
        )

    def thread(self, board, post_num, time, subject=None, author="Anonymous", comment="op"):
        self.conn.execute(
            "INSERT INTO threads(board_id, post_num, subject, author, time, comment) "
            "VALUES((SELECT id FROM boards WHERE name=?), ?, ?, ?, ?, ?)",
            (board, post_num, subject, author, time, comment),
        )

    def comment(self, board, thread_num, post_num, time, author="Anonymous", comment="reply"):
        self.conn.execute(
            "INSERT INTO comments(reply_to, post_num, author, time, comment) VALUES("
            "(SELECT t.id FROM threads t JOIN boards b ON b.id = t.board_id "
            " WHERE b.name=? AND t.post_num=?), ?, ?, ?, ?)",
            (board, thread_num, post_num, author, time, comment),
        )


@pytest.fixture()
def seed(conn):
    return Seeder(conn)
