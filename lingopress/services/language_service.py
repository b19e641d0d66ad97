"""
Language Service

Catalog queries for the languages content can be published in.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.exceptions import DuplicateResourceError, LanguageNotFoundError, ValidationError
from lingopress.i18n.locale import get_language_info
from lingopress.models import Language

logger = logging.getLogger(__name__)


async def list_languages(db: AsyncSession, active_only: bool = False) -> list[Language]:
    """Return languages ordered alphabetically by name."""
    query = select(Language)
    if active_only:
        query = query.where(Language.is_active.is_(True))
    result = await db.execute(query.order_by(Language.name))
    return list(result.scalars().all())


async def get_language_by_code(code: str, db: AsyncSession) -> Language | None:
    result = await db.execute(select(Language).where(Language.code == code))
    return result.scalars().first()


async def create_language(
    code: str,
    db: AsyncSession,
    *,
    name: str | None = None,
    native_name: str | None = None,
    is_active: bool = True,
) -> Language:
    """Insert a language. Direction is derived from the code, never supplied."""
    info = get_language_info(code)
    language = Language(
        code=code,
        name=name or info["name"],
        native_name=native_name or info["native_name"],
        is_rtl=info["is_rtl"],
        is_active=is_active,
    )
    db.add(language)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateResourceError("Language", "code", code) from e

    await db.refresh(language)
    logger.info(f"Language created: {code}")
    return language


async def delete_language(language_id: str, db: AsyncSession) -> None:
    language = await db.get(Language, language_id)
    if language is None:
        raise LanguageNotFoundError(language_id)

    await db.delete(language)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ValidationError(f"Language '{language.code}' is still used by articles") from e
    logger.info(f"Language deleted: {language.code}")
