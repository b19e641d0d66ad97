"""
Translation Service

Tag and article translation management.

Functions:
    list_tag_translations:        all translations for a tag, ordered by language
    replace_tag_translations:     atomically replace a tag's translation set
    list_article_translations:    all translations for an article, with their language
    replace_article_translations: atomically replace an article's translation set
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from sqlalchemy.orm import selectinload

from lingopress.exceptions import ArticleNotFoundError, DatabaseError, TagNotFoundError, ValidationError
from lingopress.i18n.locale import is_supported_language
from lingopress.models import Article, ArticleStatus, ArticleTranslation, Language, Tag, TagTranslation
from lingopress.utils.slugify import slugify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagTranslationInput:
    language_code: str
    name: str


async def list_tag_translations(tag_id: str, db: AsyncSession) -> list[TagTranslation]:
    """Return all translations for a tag. Raises TagNotFoundError for unknown tags."""
    tag = await db.get(Tag, tag_id)
    if tag is None:
        raise TagNotFoundError(tag_id)

    result = await db.execute(
        select(TagTranslation).where(TagTranslation.tag_id == tag_id).order_by(TagTranslation.language_code)
    )
    return list(result.scalars().all())


def _validate(translations: list[TagTranslationInput]) -> None:
    seen: set[str] = set()
    for item in translations:
        if not is_supported_language(item.language_code):
            raise ValidationError(f"Unsupported language code '{item.language_code}'", field="languageCode")
        if item.language_code in seen:
            raise ValidationError(
                f"Duplicate translation for language '{item.language_code}'",
                field="languageCode",
            )
        if not item.name.strip():
            raise ValidationError("Translation name must not be empty", field="name")
        seen.add(item.language_code)


async def replace_tag_translations(
    tag_id: str,
    translations: list[TagTranslationInput],
    db: AsyncSession,
) -> list[TagTranslation]:
    """Replace every translation of a tag with ``translations``.

    The delete and the inserts share one transaction and one commit, so
    readers never observe a half-replaced set and repeating the call with
    the same input leaves the same rows behind.

    Raises:
        TagNotFoundError: the tag does not exist.
        ValidationError: unsupported, duplicate or empty entries.
        DatabaseError: the transaction failed and was rolled back.
    """
    _validate(translations)

    tag = await db.get(Tag, tag_id)
    if tag is None:
        raise TagNotFoundError(tag_id)

    rows = [TagTranslation(tag_id=tag_id, language_code=t.language_code, name=t.name.strip()) for t in translations]
    try:
        await db.execute(delete(TagTranslation).where(TagTranslation.tag_id == tag_id))
        db.add_all(rows)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to replace translations for tag {tag_id}: {e}")
        raise DatabaseError("Failed to save tag translations", operation="replace_tag_translations") from e

    logger.info("Tag translations replaced: tag_id=%s count=%d", tag_id, len(rows))
    return rows


@dataclass(frozen=True)
class ArticleTranslationInput:
    language_code: str
    title: str
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT


async def list_article_translations(article_id: str, db: AsyncSession) -> list[ArticleTranslation]:
    """Return all translations for an article. Raises ArticleNotFoundError for unknown articles."""
    article = await db.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)

    result = await db.execute(
        select(ArticleTranslation)
        .join(Language, ArticleTranslation.language_id == Language.id)
        .options(selectinload(ArticleTranslation.language))
        .where(ArticleTranslation.article_id == article_id)
        .order_by(Language.code)
    )
    return list(result.scalars().all())


async def replace_article_translations(
    article_id: str,
    translations: list[ArticleTranslationInput],
    db: AsyncSession,
) -> list[ArticleTranslation]:
    """Replace every translation of an article with ``translations``.

    Same single-transaction contract as ``replace_tag_translations``. Each
    language must be in the catalog and differ from the article's original
    language.

    Raises:
        ArticleNotFoundError: the article does not exist.
        ValidationError: unknown, duplicate, original-language or untitled entries.
        DatabaseError: the transaction failed and was rolled back.
    """
    article = await db.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)

    codes = [t.language_code for t in translations]
    result = await db.execute(select(Language).where(Language.code.in_(codes)))
    catalog = {language.code: language for language in result.scalars().all()}

    seen: set[str] = set()
    for item in translations:
        language = catalog.get(item.language_code)
        if language is None:
            raise ValidationError(f"Unknown language '{item.language_code}'", field="languageCode")
        if item.language_code in seen:
            raise ValidationError(
                f"Duplicate translation for language '{item.language_code}'",
                field="languageCode",
            )
        if language.id == article.original_language_id:
            raise ValidationError(
                f"'{item.language_code}' is the article's original language",
                field="languageCode",
            )
        if not item.title.strip():
            raise ValidationError("Translation title must not be empty", field="title")
        seen.add(item.language_code)

    rows = [
        ArticleTranslation(
            article_id=article_id,
            language_id=catalog[t.language_code].id,
            title=t.title.strip(),
            slug=t.slug or slugify(t.title),
            excerpt=t.excerpt,
            content=t.content,
            status=t.status,
        )
        for t in translations
    ]
    try:
        await db.execute(delete(ArticleTranslation).where(ArticleTranslation.article_id == article_id))
        db.add_all(rows)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to replace translations for article {article_id}: {e}")
        raise DatabaseError("Failed to save article translations", operation="replace_article_translations") from e

    logger.info("Article translations replaced: article_id=%s count=%d", article_id, len(rows))
    return rows
