"""Analytics event collecting the page-level measurement parameters."""

from __future__ import annotations

import json
from typing import Any

from webtools.cacheability import RefinableCacheableDependency
from webtools.events import Event


class AnalyticsEvent(Event, RefinableCacheableDependency):
    """Event dispatched while building the analytics snippet for a page.

    Listeners fill in or adjust the parameters; the page then embeds the
    result of ``to_json()``.
    """

    NAME = "webtools_analytics.event"

    UTILITY = "piwik"

    def __init__(
        self,
        site_id: str | None = None,
        site_path: list[str] | None = None,
        instance: str | None = None,
    ) -> None:
        self._init_cacheability()
        self._site_id = site_id
        self._site_path = list(site_path or [])
        self._instance = instance
        self._site_section: str | None = None
        self._is_404 = False
        self._is_403 = False

    def get_site_id(self) -> str | None:
        return self._site_id

    def set_site_id(self, site_id: str) -> None:
        self._site_id = site_id

    def get_site_path(self) -> list[str]:
        return list(self._site_path)

    def add_site_path(self, path: str) -> None:
        self._site_path.append(path)

    def get_instance(self) -> str | None:
        return self._instance

    def set_instance(self, instance: str) -> None:
        self._instance = instance

    def get_site_section(self) -> str | None:
        return self._site_section

    def set_site_section(self, section: str) -> None:
        self._site_section = section

    def is_404(self) -> bool:
        return self._is_404

    def set_404(self, value: bool = True) -> None:
        self._is_404 = value

    def is_403(self) -> bool:
        return self._is_403

    def set_403(self, value: bool = True) -> None:
        self._is_403 = value

    def is_valid(self) -> bool:
        """An event without a site id produces no analytics snippet."""
        return bool(self._site_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "utility": self.UTILITY,
            "siteID": self._site_id,
            "sitePath": list(self._site_path),
        }
        if self._instance:
            data["instance"] = self._instance
        if self._site_section:
            data["siteSection"] = self._site_section
        if self._is_404:
            data["is404"] = True
        if self._is_403:
            data["is403"] = True
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
