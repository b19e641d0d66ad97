from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.database import get_db
from lingopress.permissions import can_create_or_update, require_capability
from lingopress.schemas import TagTranslationItem, TagTranslationsPayload, TagTranslationsResponse
from lingopress.services.translation_service import (
    TagTranslationInput,
    list_tag_translations,
    replace_tag_translations,
)

router = APIRouter(prefix="/api/admin/tags", tags=["Tags"])


@router.get("/{tag_id}/translations", response_model=TagTranslationsResponse)
async def get_tag_translations(tag_id: str, db: AsyncSession = Depends(get_db)):
    translations = await list_tag_translations(tag_id, db)
    return TagTranslationsResponse(
        tag_id=tag_id,
        translations=[TagTranslationItem(language_code=t.language_code, name=t.name) for t in translations],
    )


@router.post(
    "/{tag_id}/translations",
    dependencies=[Depends(require_capability(can_create_or_update, "update"))],
)
async def save_tag_translations(
    tag_id: str,
    payload: TagTranslationsPayload,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Replace the full translation set of a tag."""
    items = [TagTranslationInput(language_code=t.language_code, name=t.name) for t in payload.translations]
    await replace_tag_translations(tag_id, items, db)
    return {"success": True}
