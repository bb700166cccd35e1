import itertools
import threading
from datetime import datetime, timezone
from typing import Dict

from ..core.exceptions import CodeConflict, LinkNotFound
from ..models import ShortLink
from .base import MappingStore


class InMemoryMappingStore(MappingStore):
    """
    Process-local mapping store.

    A single lock covers check-and-insert, so insert_unique is atomic for
    threads sharing the instance. Records are built fully before they are
    published to the dict; lookups never see a partial record.
    """

    def __init__(self):
        self._links: Dict[str, ShortLink] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert_unique(self, code: str, long_url: str) -> ShortLink:
        with self._lock:
            if code in self._links:
                raise CodeConflict(code)

            link = ShortLink(
                id=next(self._ids),
                code=code,
                long_url=long_url,
                created_at=datetime.now(timezone.utc),
            )
            self._links[code] = link

        return link

    def lookup(self, code: str) -> ShortLink:
        link = self._links.get(code)
        if link is None:
            raise LinkNotFound(code)
        return link

    def count(self) -> int:
        return len(self._links)

    def ping(self) -> bool:
        return True
