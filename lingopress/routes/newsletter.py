from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.database import get_db
from lingopress.exceptions import ValidationError
from lingopress.i18n import is_supported_language
from lingopress.schemas import SubscribeRequest
from lingopress.services.newsletter_service import NewsletterService

router = APIRouter(prefix="/api/newsletter", tags=["Newsletter"])


@router.post("/subscribe", status_code=status.HTTP_201_CREATED)
async def subscribe(payload: SubscribeRequest, request: Request, db: AsyncSession = Depends(get_db)) -> dict:
    if not is_supported_language(payload.language_code):
        raise ValidationError(f"Unsupported language code '{payload.language_code}'", field="languageCode")

    await NewsletterService(db, config=request.app.state.settings).subscribe(payload.email, payload.language_code)
    return {"success": True}
