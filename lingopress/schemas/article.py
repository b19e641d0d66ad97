from datetime import datetime

from pydantic import Field, field_validator

from lingopress.models import ArticleStatus
from lingopress.schemas.base import CamelModel


def _check_cover_url(v: str | None) -> str | None:
    if not v:
        return None
    if not v.startswith(("http://", "https://")):
        raise ValueError("Cover URL must start with http:// or https://")
    return v


class ArticleCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    slug: str | None = Field(None, max_length=300, description="Derived from the title when omitted")
    excerpt: str | None = None
    content: str | None = None
    cover_url: str | None = None
    author_name: str | None = Field(None, max_length=200)
    language_code: str = Field("en", min_length=2, max_length=10)
    tags: list[str] = []

    @field_validator("cover_url")
    @classmethod
    def validate_cover_url(cls, v: str | None) -> str | None:
        return _check_cover_url(v)


class ArticleUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=300)
    slug: str | None = Field(None, max_length=300)
    excerpt: str | None = None
    content: str | None = None
    cover_url: str | None = None
    author_name: str | None = Field(None, max_length=200)
    language_code: str | None = Field(None, min_length=2, max_length=10)
    tags: list[str] | None = None

    @field_validator("cover_url")
    @classmethod
    def validate_cover_url(cls, v: str | None) -> str | None:
        return _check_cover_url(v)


class TagSummary(CamelModel):
    name: str
    slug: str


class ArticleResponse(CamelModel):
    id: str
    title: str | None
    slug: str | None
    excerpt: str | None
    status: ArticleStatus
    author_name: str | None
    original_language_id: str
    published_at: datetime | None
    updated_at: datetime


class ArticleDetailResponse(ArticleResponse):
    content: str | None
    cover_url: str | None
    tags: list[TagSummary] = []


class ArticleTranslationItem(CamelModel):
    language_code: str = Field(..., min_length=2, max_length=10)
    title: str = Field(..., min_length=1, max_length=300)
    slug: str | None = Field(None, max_length=300)
    excerpt: str | None = None
    content: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT


class ArticleTranslationsPayload(CamelModel):
    translations: list[ArticleTranslationItem]


class ArticleTranslationsResponse(CamelModel):
    article_id: str
    translations: list[ArticleTranslationItem]


class EmailResult(CamelModel):
    success: bool
    message: str | None = None
    error: str | None = None
    total_subscribers: int = 0
    success_count: int = 0
    failure_count: int = 0
    skipped: bool = False


class PublishResponse(CamelModel):
    success: bool
    message: str
    article: ArticleResponse
    email_result: EmailResult
