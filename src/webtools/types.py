"""Core types for webtools integrations."""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
    Generic,
    NewType,
    TypeVar,
)

T = TypeVar("T")

# Branded tag type - compile-time enforcement only
if TYPE_CHECKING:
    Tag = NewType("Tag", tuple[str, ...])
else:
    Tag = tuple

RULE_ENTITY_TYPE: Final = "webtools_analytics_rule"


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached value with metadata."""

    value: T
    tags: list[Tag]
    created_at: int  # Unix timestamp ms
    expires_at: int | None  # None means permanent


@dataclass(frozen=True, slots=True)
class Rule:
    """Maps a path pattern to an analytics site section."""

    id: str
    section: str
    regex: str
    supports_multilingual_aliases: bool = False

    @property
    def cache_tags(self) -> list[Tag]:
        """Tags invalidated whenever this rule changes."""
        return [Tag((RULE_ENTITY_TYPE, self.id))]


@dataclass(frozen=True, slots=True)
class SectionMatch:
    """A path resolved to a site section."""

    section: str


class _NoMatch:
    """A path definitively matched by no rule."""

    _instance: "_NoMatch | None" = None

    def __new__(cls) -> "_NoMatch":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __bool__(self) -> bool:
        return False


NO_MATCH: Final = _NoMatch()

Resolution = SectionMatch | _NoMatch


def resolution_to_cache(resolution: Resolution) -> dict[str, str] | None:
    """Serialize a resolution into a JSON-friendly cache value."""
    if isinstance(resolution, SectionMatch):
        return {"section": resolution.section}
    return None


def resolution_from_cache(value: Any) -> Resolution | None:
    """Rebuild a resolution from a cached value.

    Returns None when the value has neither shape, so callers can treat it
    as a miss and resolve again.
    """
    if value is None:
        return NO_MATCH
    if isinstance(value, dict) and isinstance(value.get("section"), str):
        return SectionMatch(section=value["section"])
    return None


# Duration type alias
Duration = str | int  # "30s", "5m", "2h", "1d" or milliseconds
