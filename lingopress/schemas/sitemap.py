from lingopress.schemas.base import CamelModel


class SitemapGenerateRequest(CamelModel):
    language: str | None = None


class SitemapSummary(CamelModel):
    language: str
    url_count: int
    catalog_available: bool
    sitemap_url: str


class SitemapGenerateResponse(CamelModel):
    success: bool
    sitemaps: list[SitemapSummary]
