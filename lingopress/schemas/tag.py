from pydantic import Field

from lingopress.schemas.base import CamelModel


class TagTranslationItem(CamelModel):
    language_code: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=1, max_length=200)


class TagTranslationsPayload(CamelModel):
    translations: list[TagTranslationItem]


class TagTranslationsResponse(CamelModel):
    tag_id: str
    translations: list[TagTranslationItem]
