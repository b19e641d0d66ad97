"""
ArticleTranslation model

Per-language copy of an Article's translatable fields. At most one row per
(article, language) pair; the translation has its own publication status.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from lingopress.database import Base
from lingopress.models.article import ArticleStatus
from lingopress.models.language import generate_id


class ArticleTranslation(Base):
    __tablename__ = "article_translations"

    id = Column(String(36), primary_key=True, default=generate_id)
    article_id = Column(String(36), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    language_id = Column(String(36), ForeignKey("languages.id"), nullable=False, index=True)

    # ── Translatable fields (mirrors Article) ─────────────────────────────────
    title = Column(String, nullable=True)
    slug = Column(String, nullable=True)  # language-specific slug
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)

    status = Column(Enum(ArticleStatus), default=ArticleStatus.DRAFT, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    article = relationship("Article", back_populates="translations")
    language = relationship("Language")

    __table_args__ = (
        # One translation per (article, language) pair
        UniqueConstraint("article_id", "language_id", name="uq_article_translation_language"),
        Index("idx_at_language_status", "language_id", "status"),
    )
