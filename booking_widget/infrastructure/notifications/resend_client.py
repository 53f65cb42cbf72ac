from __future__ import annotations

import logging

import httpx

from booking_widget.application.exceptions import DispatchError
from booking_widget.application.ports.notifier import NotifierPort
from booking_widget.application.utils.booking_summary import format_booking_email
from booking_widget.domain.entities.booking_state import BookingSlotState


class ResendNotifier(NotifierPort):
    def __init__(
        self,
        api_key: str | None,
        from_address: str,
        endpoint: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._from_address = from_address
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def send_booking(self, to: str, business_name: str, state: BookingSlotState) -> None:
        subject, text = format_booking_email(business_name, state)
        self.send_email(to=to, subject=subject, text=text)
        self._logger.info(
            "Booking notification sent",
            extra={"session_id": state.session_id, "service": state.service},
        )

    def send_email(self, to: str, subject: str, text: str) -> None:
        if not self._api_key:
            raise DispatchError("RESEND_API_KEY is not configured")

        payload = {
            "from": self._from_address,
            "to": [to],
            "subject": subject,
            "text": text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            resp = self._client.post(self._endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Email send failed", extra={"reason": str(e)})
            raise DispatchError(f"Email service unreachable: {e}") from e

        if resp.status_code >= 300:
            self._logger.error(
                "Email send rejected",
                extra={"reason": f"status={resp.status_code}", "body": resp.text[:500]},
            )
            raise DispatchError(
                f"Email service rejected the send (HTTP {resp.status_code})",
                status=resp.status_code,
                body=resp.text,
            )
