import logging
import threading

from ..core.exceptions import CodeConflict, GenerationExhausted, InvalidInput
from ..core.generator import CodeGenerator
from ..models import ShortLink
from ..store.base import MappingStore
from ..utils.validators import is_valid_url

logger = logging.getLogger(__name__)


class ShorteningService:
    """
    Create new short links.

    Candidate codes come from the generator; the store's atomic
    insert_unique decides whether a candidate wins. The service itself
    takes no locks on the request path; only the exhaustion counter is
    guarded.
    """

    # Process-wide count of requests that ran out of attempts
    exhausted_count = 0
    _exhausted_lock = threading.Lock()

    def __init__(self, store: MappingStore, generator: CodeGenerator, max_attempts: int = 5):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.generator = generator
        self.max_attempts = max_attempts

    def shorten(self, long_url: str) -> ShortLink:
        """
        Store a new mapping for a long URL.

        The same URL submitted twice gets two independent codes.

        Args:
            long_url: Absolute http(s) URL, stored exactly as submitted

        Returns:
            The created ShortLink

        Raises:
            InvalidInput: If the URL is empty or malformed
            GenerationExhausted: If every attempt collided
            StoreUnavailable: If the store failed
        """
        is_valid, error_msg = is_valid_url(long_url)
        if not is_valid:
            logger.info("Rejected URL (%s): %s", InvalidInput.kind, error_msg)
            raise InvalidInput(error_msg)

        for attempt in range(self.max_attempts):
            code = self.generator.generate(long_url, attempt)
            try:
                link = self.store.insert_unique(code, long_url)
            except CodeConflict:
                logger.debug("Code collision on attempt %d: %s", attempt, code)
                continue

            logger.info("Created short link %s (attempt %d)", link.code, attempt)
            return link

        with ShorteningService._exhausted_lock:
            ShorteningService.exhausted_count += 1
            occurrences = ShorteningService.exhausted_count
        logger.error(
            "%s: no unique code after %d attempts (total occurrences: %d)",
            GenerationExhausted.kind, self.max_attempts, occurrences
        )
        raise GenerationExhausted(self.max_attempts)
