"""Data-access layer of an imageboard: categories, boards, threads and posts."""

__version__ = "0.1.0"
