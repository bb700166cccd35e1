import logging
from typing import Optional

from ..core.exceptions import InvalidCode, LinkNotFound
from ..core.generator import BASE62, MAX_CODE_LENGTH, is_valid_code
from ..store.base import MappingStore

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Read-only lookup of long URLs on the public redirect path."""

    def __init__(self, store: MappingStore, alphabet: str = BASE62, max_length: int = MAX_CODE_LENGTH):
        self.store = store
        self.alphabet = alphabet
        self.max_length = max_length

    def resolve(self, code: str) -> Optional[str]:
        """
        Resolve a code to its long URL.

        Args:
            code: Raw code taken from the final path segment

        Returns:
            The long URL exactly as stored, or None if the code is unknown

        Raises:
            InvalidCode: If the code is empty or not drawn from the alphabet
            StoreUnavailable: If the store could not be queried
        """
        if not is_valid_code(code, self.alphabet, self.max_length):
            shown = (code or "")[:64]
            logger.info("%s: %r", InvalidCode.kind, shown)
            raise InvalidCode(f"Malformed code {shown!r}")

        try:
            link = self.store.lookup(code)
        except LinkNotFound:
            logger.debug("%s: %s", LinkNotFound.kind, code)
            return None

        return link.long_url
