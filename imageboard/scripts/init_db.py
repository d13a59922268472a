"""
Create the board store schema and provision categories/boards from seeds CSV.

Existing categories and boards are left untouched; threads and comments are
never modified.

Usage:
  python -m imageboard.scripts.init_db \
      --categories seeds/categories.csv \
      --boards seeds/boards.csv \
      [--db path/to/imageboard.db]
"""
from __future__ import annotations

import argparse
import os

from imageboard.db import ensure_schema, get_conn
from imageboard.logs import LogContext, ensure_log_schema
from imageboard.services.seed_svc import seed_load


def main(argv: list[str] | None = None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--categories", required=True)
    ap.add_argument("--boards", required=True)
    ap.add_argument("--db", default=None, help="overrides BOARD_DB_PATH / config.yaml")
    args = ap.parse_args(argv)

    if args.db:
        os.environ["BOARD_DB_PATH"] = args.db

    with get_conn() as conn:
        ensure_schema(conn)
    ensure_log_schema()

    log = LogContext("SEED_LOAD", user="init_db")
    log.set_payload({"categories_csv": args.categories, "boards_csv": args.boards})
    try:
        res = seed_load(args.categories, args.boards, log)
    except Exception as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    print({"message": "ok", **res})
    return res


if __name__ == "__main__":
    main()
