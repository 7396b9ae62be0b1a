"""Path alias lookups used by alias-aware rules."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathAlias:
    """A human-friendly path for a canonical path in one language."""

    source: str
    alias: str
    langcode: str


@runtime_checkable
class AliasStore(Protocol):
    """Read-only query surface over path aliases."""

    def lookup_source(self, alias: str, langcode: str | None = None) -> str | None:
        """Canonical path for ``alias``, if one is stored.

        With no ``langcode`` an alias in any language matches.
        """
        ...

    def has_matching_alias(self, source: str, regex: str, langcode: str) -> bool:
        """Whether ``source`` has an alias in ``langcode`` matching ``regex``."""
        ...


class MemoryAliasStore:
    """Aliases held in process memory."""

    def __init__(self, aliases: list[PathAlias] | None = None) -> None:
        self._aliases: list[PathAlias] = list(aliases or [])
        self._lock = threading.Lock()
        self.query_count = 0

    def add(self, source: str, alias: str, langcode: str) -> PathAlias:
        path_alias = PathAlias(source=source, alias=alias, langcode=langcode)
        with self._lock:
            self._aliases.append(path_alias)
        return path_alias

    def lookup_source(self, alias: str, langcode: str | None = None) -> str | None:
        with self._lock:
            for path_alias in reversed(self._aliases):
                if path_alias.alias != alias:
                    continue
                if langcode is None or path_alias.langcode == langcode:
                    return path_alias.source
        return None

    def has_matching_alias(self, source: str, regex: str, langcode: str) -> bool:
        pattern = re.compile(regex)
        with self._lock:
            self.query_count += 1
            return any(
                path_alias.source == source
                and path_alias.langcode == langcode
                and pattern.search(path_alias.alias) is not None
                for path_alias in self._aliases
            )


class AliasPathProcessor:
    """Turns a request path into its canonical path via the alias store.

    The alias is looked up in the language of the current request first.
    Without a request language, or when the path is not an alias in that
    language, an alias in any language is accepted.
    """

    def __init__(
        self,
        alias_store: AliasStore,
        current_langcode: Callable[[], str | None] | None = None,
    ) -> None:
        self._alias_store = alias_store
        self._current_langcode = current_langcode

    def canonical_path(self, path: str) -> str:
        langcode = self._current_langcode() if self._current_langcode else None
        source = None
        if langcode is not None:
            source = self._alias_store.lookup_source(path, langcode)
        if source is None:
            source = self._alias_store.lookup_source(path)
        return source if source is not None else path
