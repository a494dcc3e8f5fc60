# edhms/common/events.py
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], None]

_registry: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Decorator to register an event handler.
    Usage:
        @subscribe("alerts.changed")
        def handler(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        add_listener(event_name, fn)
        return fn
    return _decorator


def add_listener(event_name: str, fn: Handler) -> None:
    _registry[event_name].append(fn)


def remove_listener(event_name: str, fn: Handler) -> None:
    """Removing an unknown handler is a no-op."""
    handlers = _registry.get(event_name, [])
    if fn in handlers:
        handlers.remove(fn)


def publish(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Publish an event to in-process subscribers.
    Keep payloads ID-based to avoid cross-app imports.

    A failing handler is logged and does not stop delivery to the others.
    """
    for handler in list(_registry.get(event_name, [])):
        try:
            handler(payload)
        except Exception:
            logger.exception("Event handler %r failed for %s", handler, event_name)
