from abc import ABC, abstractmethod

from booking_widget.domain.entities.business import BusinessRecord


class BusinessStorePort(ABC):
    @abstractmethod
    def get(self, slug: str) -> BusinessRecord | None:
        """Return the stored record or None. Raises StorageError when the store is unreachable."""
        raise NotImplementedError

    @abstractmethod
    def upsert(self, record: BusinessRecord) -> BusinessRecord:
        """Insert or replace the record keyed by slug. Raises StorageError on failure."""
        raise NotImplementedError
