from urllib.parse import urlparse

MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> tuple[bool, str]:
    """
    Validate that a URL can be stored as a redirect target.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL cannot be empty"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL cannot contain whitespace"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL: {e}"

    # port is parsed lazily and raises on non-numeric or out-of-range values
    try:
        result.port
    except ValueError:
        return False, "URL has an invalid port"

    # Only http and https
    if result.scheme not in ['http', 'https']:
        return False, "Only HTTP and HTTPS URLs are allowed"

    # Must have a host
    if not result.hostname:
        return False, "URL must include a host"

    return True, ""


def get_client_ip(request) -> str:
    """
    Get client IP address from request.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address
    """
    # Check for X-Forwarded-For header (if behind proxy)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    # Otherwise use client.host
    return request.client.host if request.client else "unknown"
