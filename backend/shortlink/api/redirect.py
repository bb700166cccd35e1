import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..config import settings
from ..core.exceptions import InvalidCode, StoreUnavailable
from ..services.resolver import RedirectResolver
from .deps import get_resolver

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CACHE = "no-cache, no-store, must-revalidate, max-age=0"


def get_error_page() -> str:
    """Single user-facing error page; internal error kinds stay in the logs."""
    return """
    <!DOCTYPE html>
    <html><head><meta charset="UTF-8"><title>Unknown destination</title></head>
    <body style="font-family: Arial; text-align: center; padding: 50px;">
        <h1>Unknown destination.</h1>
        <p>This short link does not lead anywhere.</p>
    </body></html>
    """


def _error_response(status_code: int) -> HTMLResponse:
    response = HTMLResponse(content=get_error_page(), status_code=status_code)
    response.headers["Cache-Control"] = NO_CACHE
    return response


@router.get("/{code}", include_in_schema=False)
def redirect_to_url(code: str, resolver: RedirectResolver = Depends(get_resolver)):
    """
    Redirect to the long URL for a code.

    Mappings never change once created, so successful redirects are
    cacheable by browsers and edge caches.
    """
    try:
        long_url = resolver.resolve(code)
    except InvalidCode:
        return _error_response(status.HTTP_404_NOT_FOUND)
    except StoreUnavailable:
        logger.exception("%s while resolving %s", StoreUnavailable.kind, code)
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE)

    if long_url is None:
        return _error_response(status.HTTP_404_NOT_FOUND)

    response = RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
    response.headers["Cache-Control"] = f"public, max-age={settings.REDIRECT_CACHE_SECONDS}, immutable"
    return response
