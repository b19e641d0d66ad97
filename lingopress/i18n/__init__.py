"""
i18n (Internationalization) package

Provides language metadata, RTL detection and path-based locale resolution
for the multilingual article site.
"""

from .locale import (
    DEFAULT_LANGUAGE,
    LANGUAGE_NAMES,
    RTL_LOCALES,
    SUPPORTED_LANGUAGES,
    LanguageCode,
    ResolvedLocale,
    TextDirection,
    get_language_info,
    get_text_direction,
    html_attributes,
    is_rtl_locale,
    is_supported_language,
    resolve_locale,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_NAMES",
    "RTL_LOCALES",
    "SUPPORTED_LANGUAGES",
    "LanguageCode",
    "ResolvedLocale",
    "TextDirection",
    "get_language_info",
    "get_text_direction",
    "html_attributes",
    "is_rtl_locale",
    "is_supported_language",
    "resolve_locale",
]
