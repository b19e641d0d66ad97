from pydantic import EmailStr, Field

from lingopress.schemas.base import CamelModel


class SubscribeRequest(CamelModel):
    email: EmailStr
    language_code: str = Field("en", min_length=2, max_length=10)
