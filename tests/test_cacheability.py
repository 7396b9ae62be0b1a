"""Tests for cacheability metadata."""

from webtools import CacheableMetadata, Tag


class TestCacheableMetadata:
    """Tests for CacheableMetadata."""

    def test_defaults_are_permanent(self) -> None:
        """Test that empty metadata is cacheable forever."""
        meta = CacheableMetadata()
        assert meta.get_cache_tags() == []
        assert meta.get_cache_contexts() == []
        assert meta.get_cache_max_age() is None

    def test_tags_are_deduplicated(self) -> None:
        """Test that adding a tag twice keeps one copy."""
        meta = CacheableMetadata(tags=[Tag(("config", "a"))])
        meta.add_cache_tags([Tag(("config", "a")), Tag(("config", "b"))])
        assert meta.get_cache_tags() == [("config", "a"), ("config", "b")]

    def test_max_age_minimum_wins(self) -> None:
        """Test that the shortest max-age is kept."""
        meta = CacheableMetadata(max_age="1h")
        meta.merge_cache_max_age("5m")
        meta.merge_cache_max_age(None)
        meta.merge_cache_max_age("1d")
        assert meta.get_cache_max_age() == 300_000

    def test_merge_returns_new_metadata(self) -> None:
        """Test that merge combines without mutating either side."""
        a = CacheableMetadata(tags=[Tag(("a",))], contexts=["url.path"])
        b = CacheableMetadata(tags=[Tag(("b",))], contexts=["languages"], max_age=0)

        merged = a.merge(b)

        assert merged.get_cache_tags() == [("a",), ("b",)]
        assert merged.get_cache_contexts() == ["url.path", "languages"]
        assert merged.get_cache_max_age() == 0
        assert a.get_cache_tags() == [("a",)]
        assert a.get_cache_max_age() is None

    def test_unknown_dependency_is_uncacheable(self) -> None:
        """Test that objects without cacheability force max-age zero."""
        meta = CacheableMetadata(max_age="1h")
        meta.add_cacheable_dependency(object())
        assert meta.get_cache_max_age() == 0

    def test_equality(self) -> None:
        """Test that metadata compares by content."""
        assert CacheableMetadata(tags=[Tag(("a",))]) == CacheableMetadata(
            tags=[Tag(("a",))]
        )
        assert CacheableMetadata() != CacheableMetadata(max_age=0)
