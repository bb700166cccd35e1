from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ..config import settings
from ..core.exceptions import InvalidCode, LinkNotFound
from ..schemas.link import ErrorResponse, LinkCreate, LinkResponse, ResolveResponse
from ..services.resolver import RedirectResolver
from ..services.shortening import ShorteningService
from ..utils.url_builder import build_short_url
from .deps import get_resolver, get_shortening_service, limiter

router = APIRouter()

UNKNOWN_DESTINATION = "Unknown destination."


@router.post(
    "/shorten",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "No unique code could be generated"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
)
@limiter.limit(f"{settings.RATE_LIMIT_PER_HOUR}/hour")
def create_short_link(
    request: Request,
    link_data: LinkCreate,
    service: ShorteningService = Depends(get_shortening_service)
):
    """
    Create a short link.

    Rate limited per client address. The short URL is rendered from
    BASE_URL and SHORT_PATH_PREFIX and is not stored.
    """
    link = service.shorten(link_data.long_url)

    return LinkResponse(
        id=link.id,
        code=link.code,
        long_url=link.long_url,
        short_url=build_short_url(link.code, settings.BASE_URL, settings.SHORT_PATH_PREFIX),
        created_at=link.created_at,
    )


@router.get(
    "/resolve/{code}",
    response_model=ResolveResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown or malformed code"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
)
def resolve_code(code: str, resolver: RedirectResolver = Depends(get_resolver)):
    """
    Look up the long URL for a code.

    Malformed and unknown codes get the same 404 response.
    """
    try:
        long_url = resolver.resolve(code)
    except InvalidCode:
        long_url = None

    if long_url is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": UNKNOWN_DESTINATION, "error": LinkNotFound.kind}
        )

    return ResolveResponse(code=code, long_url=long_url)
