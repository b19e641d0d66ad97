"""
SEO Routes

Sitemap endpoints. The overview and per-language sitemaps are recomputed on
every request; downstream caches are steered with Cache-Control.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.database import get_db
from lingopress.exceptions import ResourceNotFoundError, ValidationError
from lingopress.i18n.locale import is_supported_language
from lingopress.permissions import can_create_or_update, require_capability
from lingopress.schemas import SitemapGenerateRequest, SitemapGenerateResponse, SitemapSummary
from lingopress.services.sitemap_service import SitemapService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["SEO"])


def get_base_url(request: Request) -> str:
    return request.app.state.settings.app_url.rstrip("/")


def xml_response(request: Request, content: str, extra_headers: dict | None = None) -> Response:
    max_age = request.app.state.settings.sitemap_cache_seconds
    headers = {"Cache-Control": f"public, max-age={max_age}, s-maxage={max_age}"}
    headers.update(extra_headers or {})
    return Response(content=content, media_type="application/xml", headers=headers)


@router.get("/sitemap.xml")
async def get_sitemap_overview(request: Request) -> Response:
    """Static pages of every supported language. Never touches the catalog."""
    service = SitemapService(None, get_base_url(request))
    return xml_response(request, service.render_urlset(service.generate_static_entries()))


@router.get("/sitemap-{language}.xml")
async def get_language_sitemap(
    language: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Sitemap for a single language.

    When the catalog cannot be read the static pages are still served and the
    response is marked with ``X-Sitemap-Degraded: true``.
    """
    if language not in request.app.state.settings.sitemap_languages:
        raise ResourceNotFoundError("Sitemap", language)

    service = SitemapService(db, get_base_url(request))
    sitemap = await service.generate_language_sitemap(language)

    try:
        xml = service.render_urlset(sitemap.entries)
    except Exception as e:
        logger.error(f"Error rendering {language} sitemap: {e}")
        return PlainTextResponse("Error generating sitemap", status_code=500)

    headers = None if sitemap.catalog_available else {"X-Sitemap-Degraded": "true"}
    return xml_response(request, xml, headers)


@router.post(
    "/api/admin/sitemap/generate-index",
    dependencies=[Depends(require_capability(can_create_or_update, "update"))],
)
async def generate_sitemap_index(request: Request) -> dict:
    """Build the sitemap index pointing at each per-language sitemap."""
    languages = list(request.app.state.settings.sitemap_languages)
    xml = SitemapService(None, get_base_url(request)).render_sitemap_index(languages)
    logger.info(f"Sitemap index generated for {len(languages)} languages")
    return {
        "success": True,
        "message": "Sitemap index generated successfully",
        "languages": languages,
        "xml": xml,
    }


@router.post(
    "/api/admin/sitemap/generate",
    response_model=SitemapGenerateResponse,
    dependencies=[Depends(require_capability(can_create_or_update, "update"))],
)
async def generate_sitemaps(
    request: Request,
    payload: SitemapGenerateRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Rebuild per-language sitemaps and report their size.

    With a ``language`` only that sitemap is built; otherwise one per active
    catalog language.
    """
    service = SitemapService(db, get_base_url(request))
    language = payload.language if payload else None

    if language:
        if not is_supported_language(language):
            raise ValidationError(f"Unsupported language code '{language}'", field="language")
        sitemaps = [await service.generate_language_sitemap(language)]
    else:
        sitemaps = await service.generate_all_language_sitemaps()

    logger.info(f"Sitemaps generated: {', '.join(s.language for s in sitemaps)}")
    return SitemapGenerateResponse(
        success=True,
        sitemaps=[
            SitemapSummary(
                language=s.language,
                url_count=len(s.entries),
                catalog_available=s.catalog_available,
                sitemap_url=f"{service.base_url}/sitemap-{s.language}.xml",
            )
            for s in sitemaps
        ],
    )
