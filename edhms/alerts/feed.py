# edhms/alerts/feed.py
"""
Alert change feed.

Consumers register a callback and get a Subscription back. Every delivered
signal means "something in the alert table changed"; consumers re-query the
whole list instead of patching rows. Two transports:

- PushAlertFeed: in-process, fed by model save/delete signals.
- PollingAlertFeed: compares a table fingerprint each time poll() runs.
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Dict, List, Optional

from django.conf import settings

from edhms.alerts.selectors import feed_fingerprint, fetch_alerts, filter_alerts
from edhms.common.events import add_listener, remove_listener

logger = logging.getLogger(__name__)

ALERTS_CHANGED = "alerts.changed"

ChangeCallback = Callable[[Dict[str, Any]], None]


class Subscription:
    def __init__(self, cancel: Callable[[], None]):
        self._cancel = cancel
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._cancel()
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.unsubscribe()


class AlertChangeFeed(abc.ABC):
    @abc.abstractmethod
    def subscribe(self, callback: ChangeCallback) -> Subscription:
        raise NotImplementedError


class PushAlertFeed(AlertChangeFeed):
    def subscribe(self, callback: ChangeCallback) -> Subscription:
        add_listener(ALERTS_CHANGED, callback)
        return Subscription(lambda: remove_listener(ALERTS_CHANGED, callback))


class PollingAlertFeed(AlertChangeFeed):
    """
    The first poll() only records the fingerprint. Later polls notify every
    subscriber once if the fingerprint moved since the previous poll.
    """

    def __init__(self, fingerprint: Optional[Callable[[], str]] = None):
        self._fingerprint = fingerprint or feed_fingerprint
        self._callbacks: List[ChangeCallback] = []
        self._last: Optional[str] = None

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        self._callbacks.append(callback)
        return Subscription(lambda: self._callbacks.remove(callback))

    def poll(self) -> bool:
        current = self._fingerprint()
        previous, self._last = self._last, current
        if previous is None or previous == current:
            return False

        payload = {"change": "unknown", "fingerprint": current}
        for cb in list(self._callbacks):
            try:
                cb(payload)
            except Exception:
                logger.exception("Alert feed subscriber %r failed", cb)
        return True


def default_feed(transport: str | None = None) -> AlertChangeFeed:
    transport = (transport or getattr(settings, "ALERT_FEED_TRANSPORT", "push")).lower()
    if transport == "polling":
        return PollingAlertFeed()
    if transport == "push":
        return PushAlertFeed()
    raise ValueError(f"Unknown alert feed transport: {transport}")


class AlertBoard:
    """
    The alert list as the console shows it.

    open() loads the list and subscribes; every change signal triggers a
    full reload. status/severity filters are applied to the loaded list.
    """

    def __init__(
        self,
        feed: AlertChangeFeed,
        *,
        loader: Optional[Callable[[], list]] = None,
        status: str | None = None,
        severity: str | None = None,
        on_refresh: Optional[Callable[["AlertBoard"], None]] = None,
    ):
        self.feed = feed
        self.loader = loader or fetch_alerts
        self.status = status
        self.severity = severity
        self.on_refresh = on_refresh
        self.alerts: list = []
        self.refresh_count = 0
        self._subscription: Optional[Subscription] = None

    def open(self) -> "AlertBoard":
        self.refresh()
        self._subscription = self.feed.subscribe(self._on_change)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_change(self, payload: Dict[str, Any]) -> None:
        logger.debug("Alert change signal: %s", payload)
        self.refresh()

    def refresh(self) -> None:
        self.alerts = list(self.loader())
        self.refresh_count += 1
        if self.on_refresh is not None:
            self.on_refresh(self)

    @property
    def visible(self) -> list:
        return filter_alerts(self.alerts, status=self.status, severity=self.severity)
