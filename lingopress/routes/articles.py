"""
Article Routes

Authoring, translation and publication endpoints. For publication the status
change and the subscriber notification are reported separately in the
response body.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.database import get_db
from lingopress.exceptions import PublicationError, ValidationError
from lingopress.permissions import can_create_or_update, can_delete, can_publish, require_capability
from lingopress.schemas import (
    ArticleCreate,
    ArticleDetailResponse,
    ArticleResponse,
    ArticleTranslationItem,
    ArticleTranslationsPayload,
    ArticleTranslationsResponse,
    ArticleUpdate,
    EmailResult,
    PublishResponse,
)
from lingopress.services import article_service
from lingopress.services.newsletter_service import NewsletterService
from lingopress.services.publication_service import PublicationService
from lingopress.services.translation_service import (
    ArticleTranslationInput,
    list_article_translations,
    replace_article_translations,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["Articles"])
admin_router = APIRouter(prefix="/api/admin/articles", tags=["Articles"])


@router.post(
    "",
    response_model=ArticleDetailResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(can_create_or_update, "create"))],
)
async def create_article(payload: ArticleCreate, db: AsyncSession = Depends(get_db)):
    """Create a draft article. Publishing goes through the publish endpoint."""
    return await article_service.create_article(
        db,
        language_code=payload.language_code,
        tags=payload.tags,
        **payload.model_dump(exclude={"language_code", "tags"}),
    )


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(article_id: str, db: AsyncSession = Depends(get_db)):
    return await article_service.get_article(article_id, db)


@router.put(
    "/{article_id}",
    response_model=ArticleDetailResponse,
    dependencies=[Depends(require_capability(can_create_or_update, "update"))],
)
async def update_article(article_id: str, payload: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    return await article_service.update_article(article_id, payload.model_dump(exclude_unset=True), db)


@router.delete(
    "/{article_id}",
    dependencies=[Depends(require_capability(can_delete, "delete"))],
)
async def delete_article(article_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    await article_service.delete_article(article_id, db)
    return {"success": True}


@router.post(
    "/{article_id}/publish",
    response_model=PublishResponse,
    dependencies=[Depends(require_capability(can_publish, "publish"))],
)
async def publish_article(article_id: str, request: Request, db: AsyncSession = Depends(get_db)):
    if not article_id.strip():
        raise ValidationError("Article ID is required", field="id")

    service = PublicationService(db, notifier=NewsletterService(db, config=request.app.state.settings))
    result = await service.publish(article_id)

    if not result.success:
        raise PublicationError(result.error or "Failed to publish article", article_id=article_id)

    message = "Article was already published" if result.already_published else "Article published successfully"
    return PublishResponse(
        success=True,
        message=message,
        article=ArticleResponse.model_validate(result.article),
        email_result=EmailResult(**result.email_result.to_dict()),
    )


@admin_router.get("/{article_id}/translations", response_model=ArticleTranslationsResponse)
async def get_article_translations(article_id: str, db: AsyncSession = Depends(get_db)):
    translations = await list_article_translations(article_id, db)
    return ArticleTranslationsResponse(
        article_id=article_id,
        translations=[
            ArticleTranslationItem(
                language_code=t.language.code,
                title=t.title,
                slug=t.slug,
                excerpt=t.excerpt,
                content=t.content,
                status=t.status,
            )
            for t in translations
        ],
    )


@admin_router.put(
    "/{article_id}/translations",
    dependencies=[Depends(require_capability(can_create_or_update, "update"))],
)
async def save_article_translations(
    article_id: str,
    payload: ArticleTranslationsPayload,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Replace the full translation set of an article."""
    items = [ArticleTranslationInput(**t.model_dump()) for t in payload.translations]
    await replace_article_translations(article_id, items, db)
    return {"success": True}
