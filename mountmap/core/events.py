"""
Change Bus

Synchronous publish/subscribe channel for ChangeEvents.

Subscribers register per mount name, or under "*" for every mount.
publish() returns only after every matching handler has run, in
subscription order (mount-specific handlers before wildcard ones).
A handler that raises is logged and skipped; the remaining handlers
still receive the event.

Example:
    >>> bus = ChangeBus()
    >>> stop = bus.on_change("settings", lambda key, value: print(key, value))
    >>> bus.publish(ChangeEvent(mount="settings", key="port", value=80, path="net.port"))
    port 80
    >>> stop()
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from mountmap.types.events import ChangeEvent

logger = logging.getLogger(__name__)

ALL_MOUNTS = "*"

EventHandler = Callable[[ChangeEvent], None]
KeyValueHandler = Callable[[str, Any], None]
Unsubscribe = Callable[[], None]


class ChangeBus:
    """In-process event channel owned by a MountStore."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, mount: str, handler: EventHandler) -> Unsubscribe:
        """
        Register handler(event) for one mount, or for all with "*".

        Returns:
            Callable that removes this subscription (idempotent)
        """
        handlers = self._handlers.setdefault(mount, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def on_change(self, mount: str, handler: KeyValueHandler) -> Unsubscribe:
        """Register a handler(key, value) for one mount, or for all with "*"."""

        def adapter(event: ChangeEvent) -> None:
            handler(event.key, event.value)

        return self.subscribe(mount, adapter)

    def handler_count(self, mount: str | None = None) -> int:
        """Number of handlers for a mount, or in total when mount is None."""
        if mount is None:
            return sum(len(handlers) for handlers in self._handlers.values())
        return len(self._handlers.get(mount, []))

    def publish(self, event: ChangeEvent) -> int:
        """
        Deliver an event to its mount's handlers and the wildcard handlers.

        Returns:
            Number of handlers that ran without raising
        """
        targets = list(self._handlers.get(event.mount, []))
        if event.mount != ALL_MOUNTS:
            targets.extend(self._handlers.get(ALL_MOUNTS, []))

        delivered = 0
        for handler in targets:
            try:
                handler(event)
            except Exception as e:
                logger.warning(f"Change handler failed for {event.mount}:{event.path}: {e}")
                continue
            delivered += 1
        return delivered
