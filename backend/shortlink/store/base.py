"""Abstract interface for mapping store backings."""

from abc import ABC, abstractmethod

from ..models import ShortLink


class MappingStore(ABC):
    """
    Persistence of short code -> long URL mappings.

    Implementations guarantee that ``code`` is unique across all records and
    that ``insert_unique`` is a single atomic operation with respect to
    concurrent callers. Records are never updated after insert.
    """

    @abstractmethod
    def insert_unique(self, code: str, long_url: str) -> ShortLink:
        """
        Insert a mapping only if the code is not already present.

        Args:
            code: Candidate short code
            long_url: Validated long URL, stored exactly as given

        Returns:
            The created record with ``id`` and ``created_at`` assigned

        Raises:
            CodeConflict: If the code already exists
            StoreUnavailable: If the backing could not complete the insert
        """

    @abstractmethod
    def lookup(self, code: str) -> ShortLink:
        """
        Point lookup by code.

        Raises:
            LinkNotFound: If no record has this code
            StoreUnavailable: If the backing could not be queried
        """

    @abstractmethod
    def count(self) -> int:
        """Number of stored mappings."""

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the backing is reachable."""
