# imageboard/services/seed_svc.py
from __future__ import annotations

import pandas as pd

from ..db import get_conn
from ..logs import LogContext

DEFAULT_BUMP_LIMIT = 300


def _clean(v) -> str | None:
    if v is None or pd.isna(v):
        return None
    s = str(v).strip()
    return s or None


def seed_load(categories_csv: str, boards_csv: str, log: LogContext) -> dict:
    """Provision categories and boards from CSV; rows that already exist are skipped.
       categories.csv: name
       boards.csv: name, description, category, bump_limit
       A board whose category is missing from categories.csv gets that category created.
    """
    cat_df = pd.read_csv(categories_csv, dtype=str)
    board_df = pd.read_csv(boards_csv, dtype=str)

    created_cat = 0
    created_board = 0

    with get_conn() as conn:
        names = [_clean(n) for n in cat_df["name"].tolist()]
        names += [_clean(n) for n in board_df.get("category", pd.Series(dtype=str)).tolist()]
        for name in names:
            if not name:
                continue
            cur = conn.execute("INSERT OR IGNORE INTO categories(name) VALUES(?)", (name,))
            created_cat += cur.rowcount
        conn.commit()

        cat_ids = {r["name"]: r["id"] for r in conn.execute("SELECT id, name FROM categories")}

        for _, r in board_df.iterrows():
            name = _clean(r["name"])
            if not name:
                continue
            category = _clean(r.get("category"))
            raw_limit = _clean(r.get("bump_limit"))
            bump_limit = int(float(raw_limit)) if raw_limit else DEFAULT_BUMP_LIMIT
            cur = conn.execute(
                "INSERT OR IGNORE INTO boards(name, description, category, bump_limit) VALUES(?,?,?,?)",
                (name, _clean(r.get("description")), cat_ids.get(category) if category else None, bump_limit),
            )
            created_board += cur.rowcount
        conn.commit()

    res = {"categories_created": created_cat, "boards_created": created_board}
    log.set_after(res)
    return res
