"""Event sinks for pool records.

A Pool logs every committed record and forwards it to its sinks. EventLog
keeps records in memory for indexers and tests.
"""

from __future__ import annotations

import threading
from typing import Protocol, TypeVar, runtime_checkable

from simpleswap.models.events import PoolEvent

E = TypeVar("E", bound=PoolEvent)


@runtime_checkable
class EventSink(Protocol):
    """Anything that accepts pool records."""

    def emit(self, event: PoolEvent) -> None: ...


class EventLog:
    """Append-only in-memory record of pool events."""

    def __init__(self) -> None:
        self._events: list[PoolEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: PoolEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[PoolEvent]:
        with self._lock:
            return list(self._events)

    def of_type(self, event_type: type[E]) -> list[E]:
        """Return recorded events of one type, oldest first."""
        return [e for e in self.events if isinstance(e, event_type)]

    def last(self) -> PoolEvent | None:
        with self._lock:
            return self._events[-1] if self._events else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
