"""Settings and named configuration objects."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from typing import Any, Final, Protocol, runtime_checkable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webtools.adapters.base import StorageAdapter
from webtools.adapters.memory import MemoryAdapter
from webtools.cacheability import CacheableMetadata
from webtools.tags import config_tag
from webtools.types import Tag

logger = logging.getLogger(__name__)

SITE_CONFIG: Final = "system.site"
DEFAULT_CONSENT_URL: Final = "https://webtools.europa.eu/crs/iframe/"


class Settings(BaseSettings):
    """Process-wide settings, read from ``WEBTOOLS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEBTOOLS_",
        frozen=True,
        extra="ignore",
    )

    cache_prefix: str = Field(default="webtools_analytics_rules", min_length=1)
    redis_url: str | None = Field(default=None)
    alias_database_url: str | None = Field(default=None)
    default_langcode: str = Field(default="en", min_length=1)
    consent_url: str = Field(default=DEFAULT_CONSENT_URL)
    video_popup: bool = Field(default=True)

    @field_validator("redis_url", "alias_database_url", mode="before")
    @classmethod
    def _blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, loaded once."""
    return Settings()


def build_cache_adapter(settings: Settings) -> StorageAdapter:
    """Redis when a URL is configured, otherwise process memory."""
    if settings.redis_url:
        from webtools.adapters.redis import RedisAdapter

        logger.info("Using Redis cache backend")
        return RedisAdapter.from_url(settings.redis_url, prefix=settings.cache_prefix)
    logger.info("Using in-memory cache backend")
    return MemoryAdapter()


class Config(Mapping[str, Any]):
    """A read-only named configuration object."""

    def __init__(self, name: str, data: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get_cache_tags(self) -> list[Tag]:
        return [config_tag(self.name)]

    def get_cache_contexts(self) -> list[str]:
        return []

    def get_cache_max_age(self) -> int | None:
        return None

    def cacheability(self) -> CacheableMetadata:
        return CacheableMetadata.create_from_object(self)


@runtime_checkable
class ConfigStore(Protocol):
    """Read access to named configuration objects."""

    def get(self, name: str) -> Config: ...


class MemoryConfigStore:
    """Configuration objects held in process memory.

    Unknown names return an empty configuration object.
    """

    def __init__(self, data: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._data: dict[str, dict[str, Any]] = {
            name: dict(values) for name, values in (data or {}).items()
        }

    def get(self, name: str) -> Config:
        return Config(name, self._data.get(name))

    def set(self, name: str, key: str, value: Any) -> None:
        self._data.setdefault(name, {})[key] = value

    @classmethod
    def from_settings(cls, settings: Settings) -> MemoryConfigStore:
        """Seed the site and cookie consent configuration from settings."""
        from webtools.cookie_consent import ConfigVideoPopupEvent

        return cls(
            {
                SITE_CONFIG: {"default_langcode": settings.default_langcode},
                ConfigVideoPopupEvent.CONFIG_NAME: {
                    ConfigVideoPopupEvent.VIDEO_POPUP: settings.video_popup,
                },
            }
        )
