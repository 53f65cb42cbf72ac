from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator

from booking_widget.application.ports.session_store import SessionStorePort
from booking_widget.domain.entities.booking_state import BookingSlotState


@dataclass
class _SessionLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # holders plus waiters


class MemorySessionStore(SessionStorePort):
    """
    In-process session store with idle expiry.

    Lock entries outlive `delete` and eviction while anyone holds or waits on them,
    so a request arriving after a completion still queues behind the current holder.
    """

    def __init__(self, ttl_seconds: float | None = 1800, clock: Callable[[], float] = time.time) -> None:
        self._states: dict[str, BookingSlotState] = {}
        self._locks: dict[str, _SessionLock] = {}
        self._lock_lock = threading.Lock()  # guards both dicts
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def get(self, session_id: str) -> BookingSlotState | None:
        with self._lock_lock:
            state = self._states.get(session_id)
            if state is not None and self._is_expired(state, self._clock()):
                self._evict(session_id)
                return None
            return state

    def get_or_create(self, session_id: str) -> BookingSlotState:
        state = self.get(session_id)
        if state is None:
            state = BookingSlotState(session_id=session_id)
            self.set(state)
        return state

    def set(self, state: BookingSlotState) -> None:
        now = self._clock()
        with self._lock_lock:
            self._states[state.session_id] = replace(state, updated_at=now)
            self._sweep(now)

    def delete(self, session_id: str) -> None:
        with self._lock_lock:
            self._evict(session_id)

    @contextmanager
    def lock(self, session_id: str) -> Iterator[None]:
        with self._lock_lock:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = self._locks[session_id] = _SessionLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._lock_lock:
                entry.users -= 1
                if entry.users == 0 and session_id not in self._states:
                    self._locks.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock_lock:
            return len(self._states)

    def _is_expired(self, state: BookingSlotState, now: float) -> bool:
        if not self._ttl_seconds or state.updated_at is None:
            return False
        return now - state.updated_at > self._ttl_seconds

    def _sweep(self, now: float) -> None:
        expired = [sid for sid, state in self._states.items() if self._is_expired(state, now)]
        for session_id in expired:
            self._evict(session_id)
        if expired:
            self._logger.info("Expired sessions evicted", extra={"reason": f"count={len(expired)}"})

    def _evict(self, session_id: str) -> None:
        self._states.pop(session_id, None)
        entry = self._locks.get(session_id)
        if entry is not None and entry.users == 0:
            self._locks.pop(session_id, None)
