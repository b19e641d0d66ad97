"""
Sitemap Service

Enumerates the crawlable URLs of the site per language and renders them as
sitemap protocol XML. Nothing is cached; every call recomputes from the
catalog so crawlers always see the current state.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.config import settings
from lingopress.i18n.locale import SUPPORTED_LANGUAGES
from lingopress.models import Article, ArticleStatus, ArticleTranslation, Language

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# (path suffix, change frequency, priority) for the aggregate overview
OVERVIEW_PAGES = (
    ("", "daily", 1.0),
    ("/articles", "daily", 0.9),
    ("/newsletter", "weekly", 0.8),
)

# Static pages listed at the top of each per-language sitemap
LANGUAGE_PAGES = (
    ("", "daily", 1.0),
    ("/articles", "daily", 0.8),
    ("/newsletter", "weekly", 0.6),
)

ARTICLE_CHANGE_FREQUENCY = "weekly"
ARTICLE_PRIORITY = 0.7


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: str
    priority: float


@dataclass
class LanguageSitemap:
    """Entries for one language plus whether the catalog could be read."""

    language: str
    entries: list[SitemapEntry] = field(default_factory=list)
    catalog_available: bool = True
    error: str | None = None


class SitemapService:
    """Service for generating per-language sitemaps."""

    def __init__(self, db: AsyncSession | None, base_url: str | None = None):
        self.db = db
        self.base_url = (base_url or settings.app_url).rstrip("/")

    # ============== Static surfaces ==============

    def generate_static_entries(self, languages: list[str] | None = None) -> list[SitemapEntry]:
        """Home, listing and newsletter pages for every language. No database access."""
        now = datetime.now(timezone.utc)
        entries = []
        for code in languages or SUPPORTED_LANGUAGES:
            for suffix, frequency, priority in OVERVIEW_PAGES:
                entries.append(SitemapEntry(f"{self.base_url}/{code}{suffix}", now, frequency, priority))
        return entries

    def _language_pages(self, code: str) -> list[SitemapEntry]:
        now = datetime.now(timezone.utc)
        return [
            SitemapEntry(f"{self.base_url}/{code}{suffix}", now, frequency, priority)
            for suffix, frequency, priority in LANGUAGE_PAGES
        ]

    # ============== Catalog-backed surfaces ==============

    async def generate_language_sitemap(self, code: str) -> LanguageSitemap:
        """
        Build the sitemap entries for one language.

        Static pages are always present. Published articles written in the
        language and published translations into it follow. If the catalog
        cannot be read the static pages are returned on their own and the
        result is flagged with ``catalog_available=False``.
        """
        sitemap = LanguageSitemap(language=code, entries=self._language_pages(code))

        if self.db is None:
            logger.warning(f"Database not available for {code} sitemap, returning static pages only")
            sitemap.catalog_available = False
            sitemap.error = "Database not available"
            return sitemap

        try:
            sitemap.entries.extend(await self._article_entries(code))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error generating sitemap for language {code}: {e}")
            sitemap.catalog_available = False
            sitemap.error = str(e)
            await self._reset_session()

        return sitemap

    async def _article_entries(self, code: str) -> list[SitemapEntry]:
        result = await self.db.execute(select(Language).where(Language.code == code))
        language = result.scalars().first()
        if language is None:
            logger.warning(f"Language {code} not found in database, returning static pages only")
            return []

        entries = []

        result = await self.db.execute(
            select(Article)
            .where(
                Article.status == ArticleStatus.PUBLISHED,
                Article.original_language_id == language.id,
                Article.slug.is_not(None),
            )
            .order_by(Article.published_at.desc())
        )
        for article in result.scalars().all():
            entries.append(self._article_entry(code, article.slug, article.updated_at))

        result = await self.db.execute(
            select(ArticleTranslation)
            .where(
                ArticleTranslation.language_id == language.id,
                ArticleTranslation.status == ArticleStatus.PUBLISHED,
                ArticleTranslation.slug.is_not(None),
            )
            .order_by(ArticleTranslation.updated_at.desc())
        )
        for translation in result.scalars().all():
            entries.append(self._article_entry(code, translation.slug, translation.updated_at))

        return entries

    async def _reset_session(self) -> None:
        """Roll back a failed transaction so later queries on this session can run."""
        try:
            await self.db.rollback()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Rollback after catalog failure also failed: {e}")

    def _article_entry(self, code: str, slug: str, updated_at: datetime | None) -> SitemapEntry:
        return SitemapEntry(
            url=f"{self.base_url}/{code}/articles/{slug}",
            last_modified=updated_at or datetime.now(timezone.utc),
            change_frequency=ARTICLE_CHANGE_FREQUENCY,
            priority=ARTICLE_PRIORITY,
        )

    async def generate_all_language_sitemaps(self) -> list[LanguageSitemap]:
        """One sitemap per active catalog language, or per supported language when the catalog is down."""
        codes: list[str] = list(SUPPORTED_LANGUAGES)
        if self.db is not None:
            try:
                result = await self.db.execute(
                    select(Language.code).where(Language.is_active.is_(True)).order_by(Language.code)
                )
                codes = list(result.scalars().all()) or codes
            except (SQLAlchemyError, OSError) as e:
                logger.warning(f"Falling back to built-in languages for sitemaps: {e}")
                await self._reset_session()

        return [await self.generate_language_sitemap(code) for code in codes]

    # ============== Serialization ==============

    def render_urlset(self, entries: list[SitemapEntry]) -> str:
        """Render entries as a sitemap protocol ``<urlset>`` document."""
        urlset = Element("urlset")
        urlset.set("xmlns", SITEMAP_NAMESPACE)

        for entry in entries:
            url = SubElement(urlset, "url")
            SubElement(url, "loc").text = entry.url
            SubElement(url, "lastmod").text = _format_lastmod(entry.last_modified)
            SubElement(url, "changefreq").text = entry.change_frequency
            SubElement(url, "priority").text = f"{entry.priority:.1f}"

        return XML_DECLARATION + tostring(urlset, encoding="unicode")

    def render_sitemap_index(self, languages: list[str]) -> str:
        """Render a ``<sitemapindex>`` linking every per-language sitemap."""
        sitemapindex = Element("sitemapindex")
        sitemapindex.set("xmlns", SITEMAP_NAMESPACE)

        lastmod = _format_lastmod(datetime.now(timezone.utc))
        for code in languages:
            sitemap = SubElement(sitemapindex, "sitemap")
            SubElement(sitemap, "loc").text = f"{self.base_url}/sitemap-{code}.xml"
            SubElement(sitemap, "lastmod").text = lastmod

        return XML_DECLARATION + tostring(sitemapindex, encoding="unicode")


def _format_lastmod(value: datetime) -> str:
    # SQLite hands back naive datetimes; stored values are UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
