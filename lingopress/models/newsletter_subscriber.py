from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from lingopress.database import Base
from lingopress.models.language import generate_id


class NewsletterSubscriber(Base):
    __tablename__ = "newsletter_subscribers"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(320), unique=True, index=True, nullable=False)
    language_code = Column(String(10), nullable=False, default="en")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
