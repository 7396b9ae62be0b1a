"""Applies configured site sections to analytics events."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from webtools.analytics import AnalyticsEvent
from webtools.resolver import SectionResolver


class AnalyticsRulesSubscriber:
    """Sets the site section of analytics events from the path rules."""

    def __init__(
        self, resolver: SectionResolver, current_path: Callable[[], str]
    ) -> None:
        self._resolver = resolver
        self._current_path = current_path

    def on_analytics_event(self, event: AnalyticsEvent) -> None:
        section = self._resolver.resolve(self._current_path())
        if section is not None:
            event.set_site_section(section)

    def get_subscribed_events(self) -> Mapping[str, Sequence[tuple[str, int]]]:
        return {AnalyticsEvent.NAME: [("on_analytics_event", 0)]}
