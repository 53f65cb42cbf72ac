from abc import ABC, abstractmethod

from booking_widget.domain.entities.booking_state import BookingSlotState


class NotifierPort(ABC):
    @abstractmethod
    def send_email(self, to: str, subject: str, text: str) -> None:
        """Send a plain-text email. Raises DispatchError on any failure."""
        raise NotImplementedError

    @abstractmethod
    def send_booking(self, to: str, business_name: str, state: BookingSlotState) -> None:
        """Send a booking summary to the business. Raises DispatchError on any failure."""
        raise NotImplementedError
