from __future__ import annotations

import logging

from booking_widget.application.ports.notifier import NotifierPort
from booking_widget.application.utils.booking_summary import format_booking_email
from booking_widget.domain.entities.booking_state import BookingSlotState


class MockNotifier(NotifierPort):
    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self._logger = logging.getLogger(__name__)

    def send_email(self, to: str, subject: str, text: str) -> None:
        self.sent.append({"to": to, "subject": subject, "text": text})
        self._logger.info("Mock email", extra={"to": to, "subject": subject, "text": text})

    def send_booking(self, to: str, business_name: str, state: BookingSlotState) -> None:
        subject, text = format_booking_email(business_name, state)
        self.send_email(to=to, subject=subject, text=text)
