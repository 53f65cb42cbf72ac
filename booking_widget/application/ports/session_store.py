from abc import ABC, abstractmethod
from typing import ContextManager

from booking_widget.domain.entities.booking_state import BookingSlotState


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> BookingSlotState | None:
        raise NotImplementedError

    @abstractmethod
    def get_or_create(self, session_id: str) -> BookingSlotState:
        raise NotImplementedError

    @abstractmethod
    def set(self, state: BookingSlotState) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def lock(self, session_id: str) -> ContextManager:
        """
        Per-session lock. Held by the caller for the whole read-merge-write of one message
        so concurrent messages on the same session are serialized.
        """
        raise NotImplementedError
