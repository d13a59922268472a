from __future__ import annotations

from sqlite3 import Connection, Row
from typing import List

from ..errors import translate_errors
from ..models import Category


def _row_to_category(r: Row) -> Category:
    return Category(name=r["name"])


def list_categories(conn: Connection) -> List[Category]:
    with translate_errors("list categories"):
        rows = conn.execute("SELECT name FROM categories ORDER BY name ASC").fetchall()
        return [_row_to_category(r) for r in rows]
