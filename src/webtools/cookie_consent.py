"""Cookie consent wall for embedded video players.

When enabled, oEmbed video iframes are pointed at the consent service
instead of the video provider. The consent service shows its popup and
loads the original player once the visitor accepts.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Final
from urllib.parse import urlencode

from webtools.cacheability import CacheableMetadata, RefinableCacheableDependency
from webtools.config import DEFAULT_CONSENT_URL, ConfigStore
from webtools.events import Event, EventDispatcher

logger = logging.getLogger(__name__)

_IFRAME_SRC = re.compile(r"""(<iframe\b[^>]*?\bsrc=)(["'])(.*?)\2""", re.IGNORECASE)


class ConfigVideoPopupEvent(Event, RefinableCacheableDependency):
    """Lets listeners decide whether a video embed gets the consent popup."""

    NAME = "webtools_cookie_consent.data_collection_video_popup"

    CONFIG_NAME: Final = "webtools_cookie_consent.settings"

    VIDEO_POPUP: Final = "video_popup"

    def __init__(self) -> None:
        self._init_cacheability()
        self.set_video_popup()

    def set_video_popup(self, video_popup: bool = True) -> None:
        self._video_popup = video_popup

    def is_video_popup(self) -> bool:
        return self._video_popup


def consent_iframe_url(original_url: str, langcode: str, consent_url: str) -> str:
    query = urlencode({"oriurl": original_url, "lang": langcode})
    return f"{consent_url}?{query}"


def preprocess_media_oembed_iframe(
    variables: dict[str, Any],
    *,
    dispatcher: EventDispatcher,
    config_store: ConfigStore,
    langcode: str,
    consent_url: str = DEFAULT_CONSENT_URL,
) -> dict[str, Any]:
    """Route the iframe in ``variables["media"]`` through the consent service.

    The rewrite happens only when the site configuration enables it and no
    listener of ConfigVideoPopupEvent turned it off. The configuration's
    and the event's cacheability are merged into ``variables["cache"]``
    either way, since both influence the output.
    """
    config = config_store.get(ConfigVideoPopupEvent.CONFIG_NAME)
    event = dispatcher.dispatch(ConfigVideoPopupEvent())

    cache = variables.get("cache")
    if not isinstance(cache, CacheableMetadata):
        cache = CacheableMetadata()
    cache = cache.merge(config.cacheability()).merge(event)
    variables["cache"] = cache

    if not (config.get(ConfigVideoPopupEvent.VIDEO_POPUP) and event.is_video_popup()):
        return variables

    media = variables.get("media")
    if not isinstance(media, str):
        return variables

    def rewrite(match: re.Match[str]) -> str:
        prefix, quote, src = match.groups()
        url = consent_iframe_url(html.unescape(src), langcode, consent_url)
        return f"{prefix}{quote}{html.escape(url)}{quote}"

    variables["media"], count = _IFRAME_SRC.subn(rewrite, media, count=1)
    if count == 0:
        logger.debug("No iframe src found in media markup, leaving it unchanged")
    return variables
