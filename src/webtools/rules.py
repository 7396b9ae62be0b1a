"""Analytics rules: pattern handling, storage and storage lookup.

Rule patterns are written the way site editors know them from PHP, wrapped
in delimiters with optional trailing flags (``/^\\/news\\//i``). Bare
patterns without delimiters are accepted too.
"""

from __future__ import annotations

import functools
import logging
import re
import threading
from collections.abc import Iterable
from typing import Final, Protocol, runtime_checkable

from webtools.cache import TaggedCache
from webtools.exceptions import (
    EntityTypeNotFoundError,
    InvalidEntityTypeError,
    InvalidRuleError,
)
from webtools.tags import RULE_LIST_TAG
from webtools.types import RULE_ENTITY_TYPE, Rule, Tag

logger = logging.getLogger(__name__)

_MACHINE_NAME = re.compile(r"^[a-z0-9_]+$")
_DELIMITED = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-zA-Z]*)$", re.DOTALL)
_FLAGS: Final = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": re.UNICODE,
}

# Database regex engines lack PCRE delimiters and modifiers
_DB_LEADING = re.compile(r"^/")
_DB_TRAILING = re.compile(r"/.?$")


@functools.lru_cache(maxsize=256)
def compile_rule_pattern(regex: str) -> re.Pattern[str]:
    """Compile a delimited (``/body/flags``) or bare rule pattern."""
    body, flags = regex, 0
    match = _DELIMITED.match(regex)
    if match:
        body = match.group("body")
        for flag in match.group("flags"):
            if flag not in _FLAGS:
                raise InvalidRuleError(f"Unknown regex modifier {flag!r} in {regex!r}")
            flags |= _FLAGS[flag]
    try:
        return re.compile(body, flags)
    except re.error as e:
        raise InvalidRuleError(f"Invalid regex {regex!r}: {e}") from e


def to_database_regex(regex: str) -> str:
    """Strip the leading ``/`` and a trailing ``/`` plus at most one character."""
    return _DB_TRAILING.sub("", _DB_LEADING.sub("", regex, count=1), count=1)


def validate_rule(rule: Rule) -> None:
    """Raise InvalidRuleError unless the rule can be stored."""
    if not _MACHINE_NAME.match(rule.id):
        raise InvalidRuleError(
            f"Rule id {rule.id!r} must contain only lowercase letters, "
            "numbers and underscores",
            rule.id,
        )
    if not rule.section.strip():
        raise InvalidRuleError("Rule section must not be empty", rule.id)
    if not rule.regex:
        raise InvalidRuleError("Rule regex must not be empty", rule.id)
    try:
        compile_rule_pattern(rule.regex)
    except InvalidRuleError as e:
        raise InvalidRuleError(e.message, rule.id) from e
    if rule.supports_multilingual_aliases:
        database_regex = to_database_regex(rule.regex)
        try:
            re.compile(database_regex)
        except re.error as e:
            raise InvalidRuleError(
                f"Alias regex {database_regex!r} derived from {rule.regex!r} "
                f"is invalid: {e}",
                rule.id,
            ) from e


@runtime_checkable
class RuleStorage(Protocol):
    """Read access to the full, ordered rule collection."""

    def load_multiple(self) -> list[Rule]:
        """All rules, in the order they should be tried."""
        ...

    def get_list_cache_tags(self) -> list[Tag]:
        """Tags invalidated whenever the collection changes."""
        ...


class MemoryRuleStorage:
    """Ordered in-memory rule collection.

    When a cache is attached, saving or deleting a rule invalidates the
    rule's own tag and the collection tag.
    """

    entity_type_id = RULE_ENTITY_TYPE

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        *,
        cache: TaggedCache | None = None,
    ) -> None:
        self._rules: dict[str, Rule] = {}
        self._cache = cache
        self._lock = threading.Lock()
        self.load_count = 0
        for rule in rules:
            validate_rule(rule)
            self._rules[rule.id] = rule

    def load_multiple(self) -> list[Rule]:
        with self._lock:
            self.load_count += 1
            return list(self._rules.values())

    def load(self, rule_id: str) -> Rule | None:
        with self._lock:
            return self._rules.get(rule_id)

    def get_list_cache_tags(self) -> list[Tag]:
        return [RULE_LIST_TAG]

    def save(self, rule: Rule) -> None:
        """Insert a new rule at the end, or replace one in place."""
        validate_rule(rule)
        with self._lock:
            self._rules[rule.id] = rule
        logger.info("Saved analytics rule %s (section %s)", rule.id, rule.section)
        self._invalidate(rule)

    def delete(self, rule_id: str) -> None:
        with self._lock:
            rule = self._rules.pop(rule_id, None)
        if rule is None:
            return
        logger.info("Deleted analytics rule %s", rule_id)
        self._invalidate(rule)

    def _invalidate(self, rule: Rule) -> None:
        if self._cache is not None:
            self._cache.invalidate([*rule.cache_tags, *self.get_list_cache_tags()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)


class EntityTypeManager:
    """Looks up the storage registered for an entity type."""

    def __init__(self) -> None:
        self._storages: dict[str, object] = {}

    def register(self, entity_type_id: str, storage: object) -> None:
        self._storages[entity_type_id] = storage

    def get_storage(self, entity_type_id: str) -> RuleStorage:
        try:
            storage = self._storages[entity_type_id]
        except KeyError:
            raise EntityTypeNotFoundError(entity_type_id) from None
        if not isinstance(storage, RuleStorage):
            raise InvalidEntityTypeError(
                entity_type_id, f"{type(storage).__name__} is not a rule storage"
            )
        return storage
