"""Tests for alias stores and canonical path lookups."""

import pytest

from webtools import AliasPathProcessor, AliasStore, MemoryAliasStore


class TestMemoryAliasStore:
    """Tests for MemoryAliasStore."""

    def test_lookup_source(self, alias_store: MemoryAliasStore) -> None:
        """Test resolving an alias in its language."""
        assert alias_store.lookup_source("/a-propos/equipe", "fr") == "/node/1"

    def test_lookup_source_wrong_language(self, alias_store: MemoryAliasStore) -> None:
        """Test that aliases are per language."""
        assert alias_store.lookup_source("/a-propos/equipe", "en") is None

    def test_lookup_source_any_language(self, alias_store: MemoryAliasStore) -> None:
        """Test resolving an alias without a language."""
        assert alias_store.lookup_source("/a-propos/equipe") == "/node/1"

    def test_has_matching_alias(self, alias_store: MemoryAliasStore) -> None:
        """Test regex matching against the alias column."""
        assert alias_store.has_matching_alias("/node/1", "^/about-us", "en")
        assert not alias_store.has_matching_alias("/node/1", "^/news", "en")
        assert not alias_store.has_matching_alias("/node/2", "^/about-us", "en")

    def test_implements_protocol(self, alias_store: MemoryAliasStore) -> None:
        """Test that the memory store satisfies AliasStore."""
        assert isinstance(alias_store, AliasStore)


class TestAliasPathProcessor:
    """Tests for AliasPathProcessor."""

    def test_alias_becomes_source(self, alias_store: MemoryAliasStore) -> None:
        """Test that an alias maps to its canonical path."""
        processor = AliasPathProcessor(alias_store, lambda: "en")
        assert processor.canonical_path("/about-us/team") == "/node/1"

    def test_request_language_alias(self, alias_store: MemoryAliasStore) -> None:
        """Test that a translated alias maps to its canonical path."""
        processor = AliasPathProcessor(alias_store, lambda: "fr")
        assert processor.canonical_path("/a-propos/equipe") == "/node/1"

    def test_without_request_language(self, alias_store: MemoryAliasStore) -> None:
        """Test that aliases in any language are accepted."""
        processor = AliasPathProcessor(alias_store)
        assert processor.canonical_path("/a-propos/equipe") == "/node/1"
        assert processor.canonical_path("/about-us/team") == "/node/1"

    def test_alias_from_other_language(self, alias_store: MemoryAliasStore) -> None:
        """Test falling back to other languages when the request language has none."""
        processor = AliasPathProcessor(alias_store, lambda: "de")
        assert processor.canonical_path("/a-propos/equipe") == "/node/1"

    def test_request_language_preferred(self) -> None:
        """Test that the request language wins when an alias is shared."""
        store = MemoryAliasStore()
        store.add("/node/1", "/info", "fr")
        store.add("/node/2", "/info", "en")
        assert AliasPathProcessor(store, lambda: "fr").canonical_path("/info") == "/node/1"
        assert AliasPathProcessor(store).canonical_path("/info") == "/node/2"

    def test_unknown_path_unchanged(self, alias_store: MemoryAliasStore) -> None:
        """Test that paths without an alias are already canonical."""
        processor = AliasPathProcessor(alias_store, lambda: "en")
        assert processor.canonical_path("/node/7") == "/node/7"


class TestSqlAliasStore:
    """Tests for SqlAliasStore on in-memory SQLite."""

    @pytest.fixture
    def sql_store(self):
        pytest.importorskip("sqlalchemy")
        from webtools.sql_aliases import SqlAliasStore

        store = SqlAliasStore.from_url("sqlite://")
        store.create_schema()
        store.add("/node/1", "/about-us/team", "en")
        store.add("/node/1", "/a-propos/equipe", "fr")
        store.add("/node/2", "/news/launch", "en")
        yield store
        store.disconnect()

    def test_lookup_source(self, sql_store) -> None:
        """Test resolving an alias in its language."""
        assert sql_store.lookup_source("/a-propos/equipe", "fr") == "/node/1"
        assert sql_store.lookup_source("/a-propos/equipe", "en") is None

    def test_lookup_source_any_language(self, sql_store) -> None:
        """Test resolving an alias without a language."""
        assert sql_store.lookup_source("/a-propos/equipe") == "/node/1"
        assert sql_store.lookup_source("/missing") is None

    def test_latest_alias_wins(self, sql_store) -> None:
        """Test that the most recently added alias row is used."""
        sql_store.add("/node/3", "/news/launch", "en")
        assert sql_store.lookup_source("/news/launch", "en") == "/node/3"

    def test_regexp_condition(self, sql_store) -> None:
        """Test that the REGEXP filter runs in the database."""
        assert sql_store.has_matching_alias("/node/1", "^\\/about-us\\/.*", "en")
        assert not sql_store.has_matching_alias("/node/1", "^\\/about-us\\/.*", "fr")
        assert not sql_store.has_matching_alias("/node/2", "^\\/about-us\\/.*", "en")

    def test_implements_protocol(self, sql_store) -> None:
        """Test that the SQL store satisfies AliasStore."""
        assert isinstance(sql_store, AliasStore)
