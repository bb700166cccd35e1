from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortLink(Base):
    """Short code -> long URL mapping. Immutable once stored."""
    __tablename__ = "short_links"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(36), unique=True, index=True, nullable=False)
    long_url = Column(String(2048), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Ids are never reused, even after rows are removed
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self):
        return f"<ShortLink {self.code} -> {self.long_url}>"
