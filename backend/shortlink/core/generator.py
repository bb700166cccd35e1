import hashlib
import hmac
import secrets
import string
from abc import ABC, abstractmethod

from .exceptions import InvalidInput


# Base62: case-sensitive letters and digits
BASE62 = string.ascii_letters + string.digits

MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 36


def validate_alphabet(alphabet: str) -> str:
    """Reject alphabets that cannot produce distinct codes."""
    if len(set(alphabet)) < 2:
        raise ValueError("Code alphabet needs at least two distinct characters")
    if len(set(alphabet)) != len(alphabet):
        raise ValueError("Code alphabet contains duplicate characters")
    return alphabet


def validate_length(length: int) -> int:
    if not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
        raise ValueError(
            f"Code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH}, got {length}"
        )
    return length


def is_valid_code(code: str, alphabet: str = BASE62, max_length: int = MAX_CODE_LENGTH) -> bool:
    """
    Check that a code could have been produced by a generator.

    Args:
        code: The code to check
        alphabet: Allowed characters
        max_length: Longest accepted code

    Returns:
        True if the code is non-empty, not too long and uses only the alphabet
    """
    if not code or len(code) > max_length:
        return False
    allowed = set(alphabet)
    return all(c in allowed for c in code)


def encode_int(num: int, alphabet: str = BASE62) -> str:
    """Encode a non-negative integer in the given alphabet, most significant digit first."""
    if num == 0:
        return alphabet[0]

    base = len(alphabet)
    result = []
    while num > 0:
        num, remainder = divmod(num, base)
        result.append(alphabet[remainder])

    return ''.join(reversed(result))


class CodeGenerator(ABC):
    """Produces candidate short codes. Implementations must be side-effect free."""

    def __init__(self, length: int = 7, alphabet: str = BASE62):
        self.length = validate_length(length)
        self.alphabet = validate_alphabet(alphabet)

    @abstractmethod
    def generate(self, long_url: str, attempt: int = 0) -> str:
        """Return a candidate code for the URL on the given 0-based attempt."""


class RandomCodeGenerator(CodeGenerator):
    """
    Draw every character independently from a CSPRNG.

    The long URL is ignored, so codes are not guessable from the target and
    each attempt gets fresh randomness.

    Note:
        - 7 chars base62: 62^7 = 3,521,614,606,208 combinations
        - 8 chars base62: 62^8 = 218,340,105,584,896 combinations
    """

    def generate(self, long_url: str, attempt: int = 0) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))


class HashCodeGenerator(CodeGenerator):
    """
    Deterministic codes from a keyed digest of the attempt number and URL.

    The attempt is part of the digest input, so a retry for the same URL
    yields a different candidate. The secret key keeps codes from being
    computed by anyone who only knows the URL.
    """

    def __init__(self, secret: str, length: int = 7, alphabet: str = BASE62):
        super().__init__(length=length, alphabet=alphabet)
        if not secret:
            raise ValueError("Hash code generator needs a non-empty secret")
        self._key = secret.encode("utf-8")

    def generate(self, long_url: str, attempt: int = 0) -> str:
        if not long_url:
            raise InvalidInput("URL cannot be empty")

        message = f"{attempt}:{long_url}".encode("utf-8")
        digest = hmac.new(self._key, message, hashlib.sha256).digest()
        # Reduce into the code space so the leading digit is not skewed
        space = len(self.alphabet) ** self.length
        code = encode_int(int.from_bytes(digest, "big") % space, self.alphabet)

        # Leading zero digits are dropped by encode_int; restore them
        return code.rjust(self.length, self.alphabet[0])


def build_generator(
    kind: str = "random",
    length: int = 7,
    alphabet: str = BASE62,
    secret: str = "",
) -> CodeGenerator:
    """
    Create the configured code generator.

    Args:
        kind: "random" (default) or "hash"
        length: Code length
        alphabet: Characters codes are drawn from
        secret: Key for the hash generator

    Returns:
        A code generator instance
    """
    if kind == "random":
        return RandomCodeGenerator(length=length, alphabet=alphabet)
    if kind == "hash":
        return HashCodeGenerator(secret=secret, length=length, alphabet=alphabet)
    raise ValueError(f"Unknown code generator '{kind}'")
