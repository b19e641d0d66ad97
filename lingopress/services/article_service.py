"""
Article Service

Authoring operations on articles. New articles always start as drafts;
the draft → published transition belongs to PublicationService.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lingopress.exceptions import ArticleNotFoundError, DatabaseError, ValidationError
from lingopress.models import Article, ArticleStatus, Language, Tag
from lingopress.services.language_service import get_language_by_code
from lingopress.utils.slugify import slugify

logger = logging.getLogger(__name__)

DEFAULT_TAG_COLOR = "#6366f1"

# Fields an author may set directly on the article row
EDITABLE_FIELDS = ("title", "slug", "excerpt", "content", "cover_url", "author_name")


async def get_article(article_id: str, db: AsyncSession) -> Article:
    """Load an article with its language, tags and translations. Raises ArticleNotFoundError."""
    result = await db.execute(
        select(Article)
        .options(
            selectinload(Article.original_language),
            selectinload(Article.tags),
            selectinload(Article.translations),
        )
        .where(Article.id == article_id)
        .execution_options(populate_existing=True)
    )
    article = result.scalars().first()
    if article is None:
        raise ArticleNotFoundError(article_id)
    return article


async def _resolve_language(code: str, db: AsyncSession) -> Language:
    language = await get_language_by_code(code, db)
    if language is None:
        raise ValidationError(f"Unknown language '{code}'", field="languageCode")
    return language


async def _resolve_tags(names: Iterable[str], db: AsyncSession) -> list[Tag]:
    """Find tags by name (or slug), creating the missing ones."""
    tags: list[Tag] = []
    seen: set[str] = set()
    for raw in names:
        name = raw.strip()
        slug = slugify(name)
        if not slug or slug in seen:
            continue
        seen.add(slug)

        result = await db.execute(select(Tag).where(or_(Tag.name == name, Tag.slug == slug)))
        tag = result.scalars().first()
        if tag is None:
            tag = Tag(name=name, slug=slug, color=DEFAULT_TAG_COLOR)
            db.add(tag)
            logger.info(f"Tag created: {name}")
        tags.append(tag)
    return tags


async def _commit(db: AsyncSession, operation: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Article {operation} failed: {e}")
        raise DatabaseError(f"Failed to {operation} article", operation=f"{operation}_article") from e


async def create_article(
    db: AsyncSession,
    *,
    language_code: str,
    tags: Iterable[str] = (),
    **fields,
) -> Article:
    """
    Create a draft article.

    Args:
        db: Database session
        language_code: Code of the article's original language; must exist in the catalog
        tags: Tag names, created on demand
        **fields: Any of ``EDITABLE_FIELDS``

    Returns:
        The stored article, reloaded with its relationships
    """
    language = await _resolve_language(language_code, db)

    values = {key: fields.get(key) for key in EDITABLE_FIELDS}
    if not values["slug"] and values["title"]:
        values["slug"] = slugify(values["title"])

    article = Article(**values, status=ArticleStatus.DRAFT, original_language_id=language.id)
    article.tags = await _resolve_tags(tags, db)
    db.add(article)
    await _commit(db, "create")

    logger.info(f"Article created: {article.id} ({language_code})")
    return await get_article(article.id, db)


async def update_article(article_id: str, changes: dict, db: AsyncSession) -> Article:
    """
    Apply a partial update. Keys absent from ``changes`` are left alone.

    ``tags`` replaces the whole tag set; ``language_code`` moves the article
    to another original language. Publication status is not editable here.
    """
    article = await get_article(article_id, db)

    for key in EDITABLE_FIELDS:
        if key in changes:
            setattr(article, key, changes[key])

    if changes.get("language_code"):
        language = await _resolve_language(changes["language_code"], db)
        article.original_language_id = language.id

    if changes.get("tags") is not None:
        article.tags = await _resolve_tags(changes["tags"], db)

    await _commit(db, "update")
    logger.info(f"Article updated: {article_id}")
    return await get_article(article_id, db)


async def delete_article(article_id: str, db: AsyncSession) -> None:
    """Delete an article together with its translations and tag links."""
    article = await get_article(article_id, db)
    await db.delete(article)
    await _commit(db, "delete")
    logger.info(f"Article deleted: {article_id}")
