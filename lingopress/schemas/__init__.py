from .article import (
    ArticleCreate,
    ArticleDetailResponse,
    ArticleResponse,
    ArticleTranslationItem,
    ArticleTranslationsPayload,
    ArticleTranslationsResponse,
    ArticleUpdate,
    EmailResult,
    PublishResponse,
    TagSummary,
)
from .language import LanguageCreate, LanguageListResponse, LanguageResponse
from .newsletter import SubscribeRequest
from .sitemap import SitemapGenerateRequest, SitemapGenerateResponse, SitemapSummary
from .tag import TagTranslationItem, TagTranslationsPayload, TagTranslationsResponse

__all__ = [
    "ArticleCreate",
    "ArticleDetailResponse",
    "ArticleResponse",
    "ArticleTranslationItem",
    "ArticleTranslationsPayload",
    "ArticleTranslationsResponse",
    "ArticleUpdate",
    "EmailResult",
    "PublishResponse",
    "TagSummary",
    "LanguageCreate",
    "LanguageListResponse",
    "LanguageResponse",
    "SitemapGenerateRequest",
    "SitemapGenerateResponse",
    "SitemapSummary",
    "SubscribeRequest",
    "TagTranslationItem",
    "TagTranslationsPayload",
    "TagTranslationsResponse",
]
