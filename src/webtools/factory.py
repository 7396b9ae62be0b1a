"""Wiring helpers for hosts embedding the integrations."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any

from webtools.aliases import AliasPathProcessor, AliasStore
from webtools.cache import TaggedCache
from webtools.config import SITE_CONFIG, ConfigStore, Settings, build_cache_adapter
from webtools.cookie_consent import preprocess_media_oembed_iframe
from webtools.events import EventDispatcher
from webtools.resolver import SectionResolver
from webtools.rules import EntityTypeManager
from webtools.subscriber import AnalyticsRulesSubscriber
from webtools.types import RULE_ENTITY_TYPE

logger = logging.getLogger(__name__)

OembedPreprocessor = Callable[..., dict[str, Any]]


def create_cache(settings: Settings) -> TaggedCache:
    """Create the permanent cache bin for path resolutions."""
    return TaggedCache(build_cache_adapter(settings), prefix=settings.cache_prefix)


def create_alias_store(settings: Settings) -> AliasStore | None:
    """SQL alias store for the configured database, if there is one."""
    if not settings.alias_database_url:
        return None
    from webtools.sql_aliases import SqlAliasStore

    logger.info("Using SQL alias store")
    return SqlAliasStore.from_url(settings.alias_database_url)


def create_section_resolver(
    *,
    entity_type_manager: EntityTypeManager,
    cache: TaggedCache,
    config_store: ConfigStore,
    alias_store: AliasStore | None = None,
    current_langcode: Callable[[], str | None] | None = None,
) -> SectionResolver:
    """Create a resolver reading rules through the entity type manager.

    Args:
        entity_type_manager: Registry holding the analytics rule storage
        cache: Cache bin for resolved paths
        config_store: Source of the site's default language
        alias_store: Alias lookups for alias-aware rules
        current_langcode: Language of the current request, used to turn a
            translated request path into its canonical path

    Returns:
        SectionResolver with its collaborators bound explicitly
    """
    default_langcode = config_store.get(SITE_CONFIG).get("default_langcode", "en")
    return SectionResolver(
        lambda: entity_type_manager.get_storage(RULE_ENTITY_TYPE),
        cache,
        alias_store=alias_store,
        path_processor=(
            AliasPathProcessor(alias_store, current_langcode)
            if alias_store is not None
            else None
        ),
        default_langcode=default_langcode,
    )


def register_analytics_rules(
    dispatcher: EventDispatcher,
    resolver: SectionResolver,
    current_path: Callable[[], str],
) -> AnalyticsRulesSubscriber:
    """Subscribe the section rules to analytics events."""
    subscriber = AnalyticsRulesSubscriber(resolver, current_path)
    dispatcher.add_subscriber(subscriber)
    return subscriber


def create_oembed_preprocessor(
    settings: Settings,
    *,
    dispatcher: EventDispatcher,
    config_store: ConfigStore,
) -> OembedPreprocessor:
    """Bind the oEmbed iframe hook to the configured consent service.

    The returned callable takes ``variables`` and ``langcode=``.
    """
    return functools.partial(
        preprocess_media_oembed_iframe,
        dispatcher=dispatcher,
        config_store=config_store,
        consent_url=settings.consent_url,
    )
