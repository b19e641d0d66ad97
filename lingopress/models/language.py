import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from lingopress.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


class Language(Base):
    """A language the catalog can hold content in."""

    __tablename__ = "languages"

    id = Column(String(36), primary_key=True, default=generate_id)
    code = Column(String(10), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    native_name = Column(String(100), nullable=False)
    is_rtl = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    articles = relationship("Article", back_populates="original_language")
