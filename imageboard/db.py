from __future__ import annotations

# imageboard/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os
import yaml

# DB path resolution order:
# 1) env BOARD_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path (production default)
# 4) fallback: imageboard.db in the project root
_PACKAGE_DIR = os.path.dirname(__file__)
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)
_ROOT_DB = os.path.join(_PROJECT_ROOT, "imageboard.db")
SCHEMA_PATH = os.path.join(_PACKAGE_DIR, "schema.sql")


def _read_config_yaml(cfg_path: str | None = None) -> dict:
    cfg_path = cfg_path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    origins = cfg.get("cors_origins")
    if isinstance(origins, list):
        out["cors_origins"] = [str(o).strip() for o in origins if str(o).strip()]
    return out


def get_cors_origins(cfg_path: str | None = None) -> list[str]:
    """BOARD_CORS_ORIGINS (comma separated) wins over config.yaml cors_origins; default none."""
    env = os.environ.get("BOARD_CORS_ORIGINS")
    if env is not None:
        return [o.strip() for o in env.split(",") if o.strip()]
    return _read_config_yaml(cfg_path).get("cors_origins", [])


def get_db_path(cfg_path: str | None = None) -> str:
    env_path = os.environ.get("BOARD_DB_PATH")
    cfg = _read_config_yaml(cfg_path)
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection to the board store. An explicit db_path wins,
    otherwise get_db_path() decides.
    Foreign keys are enforced and rows come back as sqlite3.Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def ensure_schema(conn: sqlite3.Connection):
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
    conn.commit()
