import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.database import get_db
from lingopress.exceptions import ServiceUnavailableError
from lingopress.permissions import can_create_or_update, can_delete, require_capability
from lingopress.schemas import LanguageCreate, LanguageListResponse, LanguageResponse
from lingopress.services.language_service import create_language, delete_language, list_languages

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Languages"])


@router.get("/api/admin/languages", response_model=LanguageListResponse)
async def get_admin_languages(db: AsyncSession = Depends(get_db)):
    """All catalog languages, active or not, ordered by name."""
    try:
        languages = await list_languages(db)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error fetching languages: {e}")
        raise ServiceUnavailableError() from e
    return {"languages": languages}


@router.post(
    "/api/admin/languages",
    response_model=LanguageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(can_create_or_update, "create"))],
)
async def post_language(payload: LanguageCreate, db: AsyncSession = Depends(get_db)):
    return await create_language(
        payload.code,
        db,
        name=payload.name,
        native_name=payload.native_name,
        is_active=payload.is_active,
    )


@router.delete(
    "/api/admin/languages/{language_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_capability(can_delete, "delete"))],
)
async def remove_language(language_id: str, db: AsyncSession = Depends(get_db)) -> None:
    await delete_language(language_id, db)


@router.get("/api/languages", response_model=LanguageListResponse)
async def get_public_languages(db: AsyncSession = Depends(get_db)):
    try:
        languages = await list_languages(db, active_only=True)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error fetching active languages: {e}")
        raise ServiceUnavailableError() from e
    return {"languages": languages}
