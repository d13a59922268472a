"""Error taxonomy of the data-access layer.

Repository functions raise these instead of bare driver exceptions so that
callers (the HTTP routes) can tell a missing board apart from a broken store.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator


class RepositoryError(Exception):
    """Base class for every failure raised by the repository layer."""


class NotFoundError(RepositoryError):
    """A named board or thread does not exist."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity}_not_found: {key}")


class ConstraintError(RepositoryError):
    """An insert referenced a parent row that does not exist."""


class DataAccessError(RepositoryError):
    """Driver failure or a row that could not be mapped."""


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except RepositoryError:
        raise
    except sqlite3.IntegrityError as e:
        raise ConstraintError(f"{action}: {e}") from e
    except sqlite3.Error as e:
        raise DataAccessError(f"{action}: {e}") from e
