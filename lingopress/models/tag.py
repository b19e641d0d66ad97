from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from lingopress.database import Base
from lingopress.models.article import article_tags
from lingopress.models.language import generate_id


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    color = Column(String(7), nullable=True)

    articles = relationship("Article", secondary=article_tags, back_populates="tags")
    translations = relationship("TagTranslation", back_populates="tag", cascade="all, delete-orphan")


class TagTranslation(Base):
    __tablename__ = "tag_translations"

    id = Column(String(36), primary_key=True, default=generate_id)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)
    language_code = Column(String(10), nullable=False)
    name = Column(String, nullable=False)

    tag = relationship("Tag", back_populates="translations")

    __table_args__ = (
        UniqueConstraint("tag_id", "language_code", name="uq_tag_translation_language"),
    )
