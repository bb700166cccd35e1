from fastapi import Depends
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..config import settings
from ..core.generator import CodeGenerator, build_generator
from ..database import get_db
from ..services.resolver import RedirectResolver
from ..services.shortening import ShorteningService
from ..store.base import MappingStore
from ..store.sql import SQLAlchemyMappingStore

# Keyed on the socket address; X-Forwarded-For is client-controlled.
# Shared by the routes and app.state so the 429 handler sees the same instance
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def get_store(db: Session = Depends(get_db)) -> MappingStore:
    return SQLAlchemyMappingStore(db)


def get_generator() -> CodeGenerator:
    return build_generator(
        kind=settings.CODE_GENERATOR,
        length=settings.SHORT_CODE_LENGTH,
        alphabet=settings.CODE_ALPHABET,
        secret=settings.HASH_SECRET,
    )


def get_shortening_service(
    store: MappingStore = Depends(get_store),
    generator: CodeGenerator = Depends(get_generator)
) -> ShorteningService:
    return ShorteningService(store, generator, max_attempts=settings.MAX_ATTEMPTS)


def get_resolver(store: MappingStore = Depends(get_store)) -> RedirectResolver:
    return RedirectResolver(store, alphabet=settings.CODE_ALPHABET)
