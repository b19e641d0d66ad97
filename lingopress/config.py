from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from lingopress.i18n.locale import SUPPORTED_LANGUAGES

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "LingoPress"
    app_version: str = "1.0.0"
    app_description: str = "Multilingual article publishing service"
    debug: bool = False
    environment: str = "development"
    app_url: str = "http://localhost:8000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Database settings
    database_url: str

    # Sitemaps
    sitemap_languages: list[str] = ["en", "ar", "ru"]
    sitemap_cache_seconds: int = 1800

    # Access control
    admin_bypass: bool = False
    rbac_fallback_role: str = "ADMIN"

    # Newsletter / SMTP
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_from: str = "LingoPress <newsletter@localhost>"
    newsletter_batch_size: int = 10

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("sitemap_languages")
    @classmethod
    def validate_sitemap_languages(cls, v: list[str]) -> list[str]:
        unsupported = [code for code in v if code not in SUPPORTED_LANGUAGES]
        if unsupported:
            raise ValueError(f"Unsupported sitemap languages: {', '.join(unsupported)}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
