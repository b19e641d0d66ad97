import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import relationship

from lingopress.database import Base
from lingopress.models.language import generate_id


class ArticleStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Article(Base):
    __tablename__ = "articles"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String, nullable=True)
    slug = Column(String, index=True, nullable=True)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    cover_url = Column(String, nullable=True)
    author_name = Column(String(200), nullable=True)
    status = Column(Enum(ArticleStatus), default=ArticleStatus.DRAFT, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    original_language_id = Column(String(36), ForeignKey("languages.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    original_language = relationship("Language", back_populates="articles")
    translations = relationship("ArticleTranslation", back_populates="article", cascade="all, delete-orphan")
    tags = relationship("Tag", secondary=article_tags, back_populates="articles")

    __table_args__ = (
        Index("idx_article_status_language", "status", "original_language_id"),
    )
