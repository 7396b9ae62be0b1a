"""Cacheability metadata carried alongside computed values.

Anything whose output ends up in a cached response (an event, a config
object, a render array) describes how that output may be cached: which
tags invalidate it, which request contexts it varies by, and for how long
it stays valid. Combining two pieces of metadata unions tags and contexts
and keeps the shortest max-age.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from webtools.duration import parse_duration
from webtools.types import Duration, Tag


def _merge_max_age(a: int | None, b: int | None) -> int | None:
    # None is permanent and therefore neutral
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


@runtime_checkable
class CacheableDependency(Protocol):
    """Anything exposing cache tags, contexts and a max-age."""

    def get_cache_tags(self) -> list[Tag]: ...

    def get_cache_contexts(self) -> list[str]: ...

    def get_cache_max_age(self) -> int | None: ...


class RefinableCacheableDependency:
    """Mixin giving an object mutable cacheability metadata."""

    _cache_tags: list[Tag]
    _cache_contexts: list[str]
    _cache_max_age: int | None

    def _init_cacheability(self) -> None:
        self._cache_tags = []
        self._cache_contexts = []
        self._cache_max_age = None

    def get_cache_tags(self) -> list[Tag]:
        return list(self._cache_tags)

    def get_cache_contexts(self) -> list[str]:
        return list(self._cache_contexts)

    def get_cache_max_age(self) -> int | None:
        return self._cache_max_age

    def add_cache_tags(self, tags: Iterable[Tag]) -> None:
        for tag in tags:
            tag = Tag(tuple(tag))
            if tag not in self._cache_tags:
                self._cache_tags.append(tag)

    def add_cache_contexts(self, contexts: Iterable[str]) -> None:
        for context in contexts:
            if context not in self._cache_contexts:
                self._cache_contexts.append(context)

    def merge_cache_max_age(self, max_age: Duration | None) -> None:
        parsed = parse_duration(max_age) if max_age is not None else None
        self._cache_max_age = _merge_max_age(self._cache_max_age, parsed)

    def add_cacheable_dependency(self, other: object) -> None:
        """Fold another object's cacheability into this one.

        Objects that do not describe their cacheability cannot be cached
        safely, so they force a max-age of zero.
        """
        if isinstance(other, CacheableDependency):
            self.add_cache_tags(other.get_cache_tags())
            self.add_cache_contexts(other.get_cache_contexts())
            self._cache_max_age = _merge_max_age(
                self._cache_max_age, other.get_cache_max_age()
            )
        else:
            self._cache_max_age = 0


class CacheableMetadata(RefinableCacheableDependency):
    """Standalone cacheability metadata."""

    def __init__(
        self,
        tags: Iterable[Tag] = (),
        contexts: Iterable[str] = (),
        max_age: Duration | None = None,
    ) -> None:
        self._init_cacheability()
        self.add_cache_tags(tags)
        self.add_cache_contexts(contexts)
        self.merge_cache_max_age(max_age)

    @classmethod
    def create_from_object(cls, obj: object) -> CacheableMetadata:
        meta = cls()
        meta.add_cacheable_dependency(obj)
        return meta

    def merge(self, other: CacheableDependency) -> CacheableMetadata:
        """Return new metadata combining this and ``other``."""
        merged = CacheableMetadata(
            self._cache_tags, self._cache_contexts, self._cache_max_age
        )
        merged.add_cacheable_dependency(other)
        return merged

    def to_dict(self) -> dict[str, object]:
        return {
            "tags": [list(tag) for tag in self._cache_tags],
            "contexts": list(self._cache_contexts),
            "max_age": self._cache_max_age,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheableMetadata):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"CacheableMetadata(tags={self._cache_tags!r}, "
            f"contexts={self._cache_contexts!r}, max_age={self._cache_max_age!r})"
        )
