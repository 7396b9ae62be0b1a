"""Resolve a request path to its analytics site section.

Rules are tried in stored order and the first match wins. The outcome,
including "no rule applies", is cached permanently under the path:

- a match is tagged with the matching rule's cache tags;
- "no match" is tagged with the rule collection's list tags, so adding a
  rule anywhere re-evaluates every path that previously matched nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from webtools.aliases import AliasStore
from webtools.cache import TaggedCache
from webtools.exceptions import (
    EntityTypeNotFoundError,
    InvalidEntityTypeError,
    RuleStorageUnavailableError,
)
from webtools.rules import RuleStorage, compile_rule_pattern, to_database_regex
from webtools.types import (
    NO_MATCH,
    Resolution,
    Rule,
    SectionMatch,
    resolution_from_cache,
    resolution_to_cache,
)

logger = logging.getLogger(__name__)

StorageProvider = Callable[[], RuleStorage]


class PathProcessor(Protocol):
    """Maps a request path to the canonical path it is an alias of."""

    def canonical_path(self, path: str) -> str: ...


class SectionResolver:
    """Finds the site section configured for a request path."""

    def __init__(
        self,
        storage_provider: StorageProvider,
        cache: TaggedCache,
        *,
        alias_store: AliasStore | None = None,
        path_processor: PathProcessor | None = None,
        default_langcode: str = "en",
    ) -> None:
        self._storage_provider = storage_provider
        self._cache = cache
        self._alias_store = alias_store
        self._path_processor = path_processor
        self._default_langcode = default_langcode

    def resolve(self, path: str) -> str | None:
        """Section for ``path``, or None when no rule applies."""
        resolution = self.lookup(path)
        if isinstance(resolution, SectionMatch):
            return resolution.section
        return None

    def lookup(self, path: str) -> Resolution:
        """Resolve ``path``, serving previously resolved paths from the cache."""
        entry = self._cache.get(path)
        if entry is not None:
            cached = resolution_from_cache(entry.value)
            if cached is not None:
                logger.debug("Section cache hit for %s: %r", path, cached)
                return cached

        logger.debug("Section cache miss for %s", path)
        storage = self._get_storage()
        for rule in storage.load_multiple():
            if self._matches(rule, path):
                resolution = SectionMatch(section=rule.section)
                self._cache.set(
                    path, resolution_to_cache(resolution), tags=rule.cache_tags
                )
                return resolution

        self._cache.set(
            path, resolution_to_cache(NO_MATCH), tags=storage.get_list_cache_tags()
        )
        return NO_MATCH

    def _get_storage(self) -> RuleStorage:
        try:
            return self._storage_provider()
        # The rule entity type is always registered; lookup failures are faults
        except (EntityTypeNotFoundError, InvalidEntityTypeError) as e:
            logger.error("Analytics rule storage is unavailable: %s", e.message)
            raise RuleStorageUnavailableError(e.message) from e

    def _matches(self, rule: Rule, path: str) -> bool:
        if rule.supports_multilingual_aliases:
            return self._matches_alias(rule, path)
        return compile_rule_pattern(rule.regex).search(path) is not None

    def _matches_alias(self, rule: Rule, path: str) -> bool:
        if self._alias_store is None:
            logger.warning(
                "Rule %s needs alias lookups but no alias store is configured",
                rule.id,
            )
            return False
        source = (
            self._path_processor.canonical_path(path)
            if self._path_processor is not None
            else path
        )
        return self._alias_store.has_matching_alias(
            source, to_database_regex(rule.regex), self._default_langcode
        )
