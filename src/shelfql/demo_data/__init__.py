"""Demo data for dev mode."""

from __future__ import annotations

from .seed import DEFAULT_BOOKS, load_seed_file, seed_catalog

__all__ = [
    "DEFAULT_BOOKS",
    "load_seed_file",
    "seed_catalog",
]
