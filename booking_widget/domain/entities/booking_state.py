from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingSlotState:
    session_id: str
    service: str | None = None
    date: str | None = None  # YYYY-MM-DD
    time: str | None = None  # HH:MM, 24h
    in_booking: bool = False
    updated_at: float | None = None

    @property
    def status(self) -> str:
        if not self.in_booking:
            return "idle"
        if not self.service:
            return "collecting_service"
        if not self.date:
            return "collecting_date"
        if not self.time:
            return "collecting_time"
        return "awaiting_confirmation"
