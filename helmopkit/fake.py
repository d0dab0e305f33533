"""A controller stand-in that records what is asked of it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class WatchCall:
    """One recorded call to :meth:`FakeController.watch`."""

    source: Any
    handler: Any
    predicates: tuple[Any, ...] = ()


@dataclass
class FakeController:
    """Records watches, start-up and reconcile requests instead of acting on them."""

    watch_calls: list[WatchCall] = field(default_factory=list)
    started: bool = False
    reconcile_requests: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.discard")
        self.logger.addHandler(logging.NullHandler())
        self.logger.propagate = False

    def watch(self, source: Any, handler: Any, *args: Any) -> None:
        self.watch_calls.append(WatchCall(source, handler, tuple(args)))

    def start(self, stop_event: threading.Event) -> None:
        """Mark the controller started and block until ``stop_event`` is set."""
        self.started = True
        stop_event.wait()

    def reconcile(self, request: Any) -> None:
        """Record the request; nothing is requeued."""
        self.reconcile_requests.append(request)