import logging

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import CodeConflict, LinkNotFound, StoreUnavailable
from ..models import ShortLink
from .base import MappingStore

logger = logging.getLogger(__name__)


class SQLAlchemyMappingStore(MappingStore):
    """
    Mapping store on a SQLAlchemy session.

    Uniqueness is enforced by the unique index on ``short_links.code``: two
    concurrent inserts of the same code cannot both commit, and the loser
    gets an IntegrityError which is reported as CodeConflict.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert_unique(self, code: str, long_url: str) -> ShortLink:
        link = ShortLink(code=code, long_url=long_url)
        self.db.add(link)

        # id and created_at are read before commit; any failure up to and
        # including commit rolls the whole insert back
        try:
            self.db.flush()
            link_id, created_at = link.id, link.created_at
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise CodeConflict(code)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(f"Insert failed: {e.__class__.__name__}") from e

        # Detached copy: reading it never goes back to the database
        return ShortLink(id=link_id, code=code, long_url=long_url, created_at=created_at)

    def lookup(self, code: str) -> ShortLink:
        try:
            link = self.db.query(ShortLink).filter(ShortLink.code == code).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(f"Lookup failed: {e.__class__.__name__}") from e

        if link is None:
            raise LinkNotFound(code)

        return link

    def count(self) -> int:
        try:
            return self.db.query(func.count(ShortLink.id)).scalar() or 0
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(f"Count failed: {e.__class__.__name__}") from e

    def ping(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            self.db.rollback()
            return False
