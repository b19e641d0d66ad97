from pydantic import Field

from lingopress.schemas.base import CamelModel


class LanguageCreate(CamelModel):
    code: str = Field(..., min_length=2, max_length=10, description="Language code, e.g. 'ar'")
    name: str | None = Field(None, max_length=100)
    native_name: str | None = Field(None, max_length=100)
    is_active: bool = True


class LanguageResponse(CamelModel):
    id: str
    code: str
    name: str
    native_name: str
    is_rtl: bool
    is_active: bool


class LanguageListResponse(CamelModel):
    languages: list[LanguageResponse]
