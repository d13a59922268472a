from __future__ import annotations

from sqlite3 import Connection, Row
from typing import List

from ..errors import NotFoundError, translate_errors
from ..models import Board

# category is an outer join: uncategorized boards come back with category NULL
_BOARD_SELECT = """
SELECT b.name, b.description, c.name AS category, b.bump_limit
FROM boards b
LEFT JOIN categories c ON c.id = b.category
"""


def _row_to_board(r: Row) -> Board:
    return Board(
        name=r["name"],
        description=r["description"],
        category=r["category"],
        bump_limit=r["bump_limit"],
    )


def list_boards(conn: Connection) -> List[Board]:
    with translate_errors("list boards"):
        rows = conn.execute(_BOARD_SELECT + " ORDER BY b.name ASC").fetchall()
        return [_row_to_board(r) for r in rows]


def list_boards_by_category(conn: Connection, category_name: str) -> List[Board]:
    """Boards filed under category_name; empty when the category is unknown."""
    with translate_errors(f"list boards of category {category_name!r}"):
        rows = conn.execute(
            _BOARD_SELECT + " WHERE c.name = ? ORDER BY b.name ASC",
            (category_name,),
        ).fetchall()
        return [_row_to_board(r) for r in rows]


def get_board(conn: Connection, board_name: str) -> Board:
    with translate_errors(f"get board {board_name!r}"):
        row = conn.execute(_BOARD_SELECT + " WHERE b.name = ?", (board_name,)).fetchone()
    if row is None:
        raise NotFoundError("board", board_name)
    return _row_to_board(row)
