"""Short URL rendering and code extraction at the HTTP boundary."""

from urllib.parse import urlsplit


def build_short_url(code: str, base_url: str, path_prefix: str = "") -> str:
    """
    Build the shareable short URL for a code.

    Args:
        code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., s)

    Returns:
        Complete short URL, e.g. https://example.com/s/Xk9pQ2w
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{code}"
    return f"{base}/{code}"


def extract_code(path: str) -> str:
    """
    Take the code from the final path segment of an inbound URL or path.

    ``/s/a1f9c3`` and ``https://host/s/a1f9c3/?x=1`` both give ``a1f9c3``.
    Returns an empty string when there is no segment.
    """
    path = urlsplit(path).path if "://" in path else path.split("?", 1)[0].split("#", 1)[0]
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else ""
