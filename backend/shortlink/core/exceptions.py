"""
Error taxonomy for shortening and redirect resolution.

Every error carries a ``kind`` string that is written to logs and returned in
JSON error bodies, so callers can tell failures apart without parsing messages.
"""


class ShortLinkError(Exception):
    """Base class for all short link errors"""
    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class InvalidInput(ShortLinkError):
    """Submitted long URL is empty or malformed"""
    kind = "invalid_input"


class InvalidCode(ShortLinkError):
    """Code on the resolve path is empty or uses characters outside the alphabet"""
    kind = "invalid_code"


class CodeConflict(ShortLinkError):
    """Candidate code is already stored. Recovered by the retry loop."""
    kind = "code_conflict"

    def __init__(self, code: str):
        super().__init__(f"Code '{code}' already exists")
        self.code = code


class GenerationExhausted(ShortLinkError):
    """Every attempt produced a colliding code"""
    kind = "generation_exhausted"

    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate a unique short code after {attempts} attempts")
        self.attempts = attempts


class LinkNotFound(ShortLinkError):
    """No mapping exists for the code"""
    kind = "not_found"

    def __init__(self, code: str):
        super().__init__(f"Code '{code}' not found")
        self.code = code


class StoreUnavailable(ShortLinkError):
    """Persistence layer failed, timed out or could not be reached"""
    kind = "store_unavailable"
