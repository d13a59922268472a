"""Repository layer: parameterized SQL over the board store (SQLite).

Every function takes the connection as its first argument and returns typed
records from imageboard.models. Nothing here commits or retries.
"""
from __future__ import annotations
