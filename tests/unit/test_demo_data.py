#!/usr/bin/env python3
"""Tests for demo data seeding."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from shelfql.demo_data import DEFAULT_BOOKS, load_seed_file, seed_catalog
from shelfql.runtime.catalog import Catalog


class TestSeedCatalog:
    def test_default_books_get_ids_one_and_two(self) -> None:
        """The two demo books keep their familiar ids."""
        records = seed_catalog(Catalog())

        assert [(r.id, r.title) for r in records] == [
            ("1", "The Great Gatsby"),
            ("2", "To Kill a Mockingbird"),
        ]
        assert records[0].genre == "Novel"
        assert records[1].year == 1960

    def test_default_books_constant(self) -> None:
        assert len(DEFAULT_BOOKS) == 2


class TestLoadSeedFile:
    def test_reads_books(self, tmp_path: Path) -> None:
        path = tmp_path / "books.json"
        path.write_text(
            '[{"title": "Emma", "author": "Jane Austen", "year": 1815, "genre": "Novel"},'
            ' {"title": "Ulysses", "author": "James Joyce", "year": 1922}]'
        )

        books = load_seed_file(path)

        assert [b.title for b in books] == ["Emma", "Ulysses"]
        assert books[1].genre is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_seed_file(tmp_path / "nope.json")

    def test_malformed_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('[{"title": "No author", "year": 2000}]')

        with pytest.raises(ValidationError):
            load_seed_file(path)
