# chargingcloud/api/contracts/status.py
"""
Admin status and operational status with bounded history.
"""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, TypeVar

DEFAULT_HISTORY_LIMIT = 50


class AdminStatusType(str, Enum):
    UNKNOWN = "Unknown"
    OPERATIONAL = "Operational"
    OUT_OF_SERVICE = "OutOfService"
    BLOCKED = "Blocked"
    INTERNAL_USE = "InternalUse"
    PLANNED = "Planned"
    UNDER_DEVELOPMENT = "UnderDevelopment"
    DELETED = "Deleted"


class StatusType(str, Enum):
    UNKNOWN = "Unknown"
    AVAILABLE = "Available"
    CHARGING = "Charging"
    RESERVED = "Reserved"
    OCCUPIED = "Occupied"
    FAULTED = "Faulted"
    OFFLINE = "Offline"
    OUT_OF_SERVICE = "OutOfService"


StatusT = TypeVar("StatusT", bound=Enum)


@dataclass(frozen=True)
class Timestamped(Generic[StatusT]):
    timestamp: datetime
    value: StatusT


class StatusSchedule(Generic[StatusT]):
    """Current status plus a bounded, newest-first history.

    Args:
        initial: Value reported until the first ``set``.
        limit: Maximum number of retained history entries.
    """

    def __init__(self, initial: StatusT, *, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("Status history limit must be positive")
        self._lock = threading.Lock()
        self._entries: deque[Timestamped[StatusT]] = deque(maxlen=limit)
        self._entries.appendleft(Timestamped(datetime.now(timezone.utc), initial))

    @property
    def current(self) -> StatusT:
        return self._entries[0].value

    def set(self, value: StatusT, timestamp: datetime | None = None) -> None:
        entry = Timestamped(timestamp or datetime.now(timezone.utc), value)
        with self._lock:
            if entry.timestamp >= self._entries[0].timestamp:
                self._entries.appendleft(entry)
                return
            # late report: keep the history ordered
            ordered = sorted([*self._entries, entry], key=lambda e: e.timestamp, reverse=True)
            self._entries.clear()
            self._entries.extend(ordered[: self._entries.maxlen])

    def history(self, size: int | None = None) -> list[Timestamped[StatusT]]:
        with self._lock:
            entries = list(self._entries)
        return entries if size is None else entries[: max(size, 0)]

    def to_json(self, history_size: int = 1) -> dict[str, str]:
        return {
            e.timestamp.isoformat(): e.value.value for e in self.history(history_size)
        }

    def __len__(self) -> int:
        return len(self._entries)
