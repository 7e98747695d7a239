# predictor/events.py
"""
In-process publish/subscribe channel for round and scoring changes.

Delivery is best effort: a subscriber that raises is logged and skipped so the
publisher (and the other subscribers) are never affected. Writers re-check the
persisted round status before committing, so a missed event self-corrects.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from loguru import logger


class EventKind(str, Enum):
    ROUND_OPENED = "round_opened"
    ROUND_CLOSED = "round_closed"
    PREDICTION_SUBMITTED = "prediction_submitted"
    SCORES_UPDATED = "scores_updated"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    payload: Dict[str, Any] = field(default_factory=dict)
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


Callback = Callable[[Event], None]


class EventBus:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: List[Tuple[Callback, Optional[Set[EventKind]]]] = []

    def subscribe(self, callback: Callback, kinds: Optional[Iterable[EventKind]] = None) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        entry = (callback, set(kinds) if kinds is not None else None)
        with self._lock:
            self._subscribers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._subscribers:
                    self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, event: Event) -> int:
        """Deliver ``event`` to matching subscribers. Returns how many received it."""
        with self._lock:
            targets = list(self._subscribers)

        delivered = 0
        for callback, kinds in targets:
            if kinds is not None and event.kind not in kinds:
                continue
            try:
                callback(event)
                delivered += 1
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed on {event.kind.value}")
        return delivered

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()


# Shared by every session in the Streamlit process
bus = EventBus()


def publish(kind: EventKind, **payload: Any) -> int:
    return bus.publish(Event(kind=kind, payload=payload))
