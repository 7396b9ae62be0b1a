"""webtools - Analytics site sections and video consent for web applications."""

from contextlib import suppress

# Adapters
from webtools.adapters import MemoryAdapter, StorageAdapter
from webtools.aliases import AliasPathProcessor, AliasStore, MemoryAliasStore, PathAlias
from webtools.analytics import AnalyticsEvent
from webtools.cache import TaggedCache
from webtools.cacheability import CacheableMetadata, RefinableCacheableDependency
from webtools.config import (
    Config,
    ConfigStore,
    MemoryConfigStore,
    Settings,
    get_settings,
)
from webtools.cookie_consent import (
    ConfigVideoPopupEvent,
    preprocess_media_oembed_iframe,
)

# Duration parsing
from webtools.duration import parse_duration
from webtools.events import Event, EventDispatcher
from webtools.exceptions import (
    EntityTypeNotFoundError,
    InvalidEntityTypeError,
    InvalidRuleError,
    RuleStorageUnavailableError,
    WebtoolsError,
)
from webtools.factory import (
    create_alias_store,
    create_cache,
    create_oembed_preprocessor,
    create_section_resolver,
    register_analytics_rules,
)
from webtools.resolver import SectionResolver
from webtools.rules import (
    EntityTypeManager,
    MemoryRuleStorage,
    RuleStorage,
    compile_rule_pattern,
    to_database_regex,
)
from webtools.subscriber import AnalyticsRulesSubscriber
from webtools.tags import (
    RULE_LIST_TAG,
    config_tag,
    define_tags,
    deserialize_tag,
    is_tag_prefix,
    rule_tag,
    serialize_tag,
)

# Core types
from webtools.types import (
    NO_MATCH,
    RULE_ENTITY_TYPE,
    CacheEntry,
    Duration,
    Resolution,
    Rule,
    SectionMatch,
    Tag,
)

# Optional imports - only available when dependencies are installed
with suppress(ImportError):
    from webtools.adapters import RedisAdapter

with suppress(ImportError):
    from webtools.sql_aliases import SqlAliasStore

__version__ = "0.1.0"

__all__ = [
    "NO_MATCH",
    "RULE_ENTITY_TYPE",
    "RULE_LIST_TAG",
    "AliasPathProcessor",
    "AliasStore",
    "AnalyticsEvent",
    "AnalyticsRulesSubscriber",
    "CacheEntry",
    "CacheableMetadata",
    "Config",
    "ConfigStore",
    "ConfigVideoPopupEvent",
    "Duration",
    "EntityTypeManager",
    "EntityTypeNotFoundError",
    "Event",
    "EventDispatcher",
    "InvalidEntityTypeError",
    "InvalidRuleError",
    "MemoryAdapter",
    "MemoryAliasStore",
    "MemoryConfigStore",
    "MemoryRuleStorage",
    "PathAlias",
    "RedisAdapter",
    "RefinableCacheableDependency",
    "Resolution",
    "Rule",
    "RuleStorage",
    "RuleStorageUnavailableError",
    "SectionMatch",
    "SectionResolver",
    "Settings",
    "SqlAliasStore",
    "StorageAdapter",
    "Tag",
    "TaggedCache",
    "WebtoolsError",
    "compile_rule_pattern",
    "config_tag",
    "create_alias_store",
    "create_cache",
    "create_oembed_preprocessor",
    "create_section_resolver",
    "define_tags",
    "deserialize_tag",
    "get_settings",
    "is_tag_prefix",
    "parse_duration",
    "preprocess_media_oembed_iframe",
    "register_analytics_rules",
    "rule_tag",
    "serialize_tag",
    "to_database_regex",
]
