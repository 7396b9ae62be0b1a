"""Shared pytest fixtures."""

import pytest

from webtools import (
    AliasPathProcessor,
    EntityTypeManager,
    EventDispatcher,
    MemoryAdapter,
    MemoryAliasStore,
    MemoryConfigStore,
    MemoryRuleStorage,
    Rule,
    SectionResolver,
    TaggedCache,
)
from webtools.types import RULE_ENTITY_TYPE


@pytest.fixture
def adapter() -> MemoryAdapter:
    """Create a fresh MemoryAdapter for each test."""
    return MemoryAdapter()


@pytest.fixture
def cache(adapter: MemoryAdapter) -> TaggedCache:
    """Create a permanent cache bin on the memory adapter."""
    return TaggedCache(adapter, prefix="test")


@pytest.fixture
def rules() -> list[Rule]:
    """Common rule set, most specific first."""
    return [
        Rule(id="news_archive", section="News archive", regex="/^\\/news\\/archive/"),
        Rule(id="news", section="News", regex="/^\\/news(\\/|$)/"),
        Rule(id="events", section="Events", regex="/^\\/EVENTS/i"),
    ]


@pytest.fixture
def storage(rules: list[Rule], cache: TaggedCache) -> MemoryRuleStorage:
    """Rule storage preloaded with the common rules, invalidating the cache on writes."""
    return MemoryRuleStorage(rules, cache=cache)


@pytest.fixture
def entity_type_manager(storage: MemoryRuleStorage) -> EntityTypeManager:
    """Entity type manager with the rule storage registered."""
    manager = EntityTypeManager()
    manager.register(RULE_ENTITY_TYPE, storage)
    return manager


@pytest.fixture
def alias_store() -> MemoryAliasStore:
    """Alias store with an English and a French alias for node 1."""
    store = MemoryAliasStore()
    store.add("/node/1", "/about-us/team", "en")
    store.add("/node/1", "/a-propos/equipe", "fr")
    return store


@pytest.fixture
def resolver(
    entity_type_manager: EntityTypeManager,
    cache: TaggedCache,
    alias_store: MemoryAliasStore,
) -> SectionResolver:
    """Resolver wired to the shared fixtures."""
    return SectionResolver(
        lambda: entity_type_manager.get_storage(RULE_ENTITY_TYPE),
        cache,
        alias_store=alias_store,
        path_processor=AliasPathProcessor(alias_store, lambda: "fr"),
        default_langcode="en",
    )


@pytest.fixture
def config_store() -> MemoryConfigStore:
    """Configuration with the site language and the video popup enabled."""
    return MemoryConfigStore(
        {
            "system.site": {"default_langcode": "en"},
            "webtools_cookie_consent.settings": {"video_popup": True},
        }
    )


@pytest.fixture
def dispatcher() -> EventDispatcher:
    """Create an empty event dispatcher."""
    return EventDispatcher()
