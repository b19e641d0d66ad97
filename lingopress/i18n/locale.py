"""
Locale helpers

Pure functions for mapping request paths to a language and text direction:
- Supported language codes and their metadata
- RTL (right-to-left) detection
- Leading-segment locale resolution for URL paths
"""

from __future__ import annotations

import enum
from typing import NamedTuple

# ── Constants ─────────────────────────────────────────────────────────────────


class LanguageCode(str, enum.Enum):
    """Languages the site publishes in."""

    EN = "en"
    AR = "ar"
    ZH = "zh"
    RU = "ru"
    DE = "de"
    FR = "fr"
    HI = "hi"


class TextDirection(str, enum.Enum):
    LTR = "ltr"
    RTL = "rtl"


DEFAULT_LANGUAGE = LanguageCode.EN

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(code.value for code in LanguageCode)

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "ku", "dv"})

# English names, used for ordering and admin listings
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "ar": "Arabic",
    "zh": "Chinese",
    "ru": "Russian",
    "de": "German",
    "fr": "French",
    "hi": "Hindi",
}

NATIVE_LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "ar": "العربية",
    "zh": "中文",
    "ru": "Русский",
    "de": "Deutsch",
    "fr": "Français",
    "hi": "हिन्दी",
}


class ResolvedLocale(NamedTuple):
    language_code: LanguageCode
    direction: TextDirection
    path_without_language: str


# ── Public helpers ────────────────────────────────────────────────────────────


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given locale is right-to-left.

    Compares only the base language tag (before the first hyphen), so
    both "ar" and "ar-SA" are identified as RTL.
    """
    base = locale.split("-")[0].lower()
    return base in RTL_LOCALES


def get_text_direction(locale: str) -> TextDirection:
    return TextDirection.RTL if is_rtl_locale(locale) else TextDirection.LTR


def is_supported_language(code: str) -> bool:
    return code in SUPPORTED_LANGUAGES


def resolve_locale(path: str) -> ResolvedLocale:
    """Resolve the language and text direction for a request path.

    The first non-empty path segment is matched against the supported
    language codes. Anything else (an empty path, "/articles", "/xx/...")
    resolves to the default language with the path left untouched.

    Args:
        path: Slash-delimited request path, e.g. "/ar/articles/some-slug".

    Returns:
        ResolvedLocale with the language code, its direction and the path
        with the language prefix removed.
    """
    segments = [segment for segment in (path or "").split("/") if segment]

    if segments and segments[0] in SUPPORTED_LANGUAGES:
        code = LanguageCode(segments[0])
        return ResolvedLocale(code, get_text_direction(code.value), "/" + "/".join(segments[1:]))

    return ResolvedLocale(DEFAULT_LANGUAGE, get_text_direction(DEFAULT_LANGUAGE.value), path or "/")


def html_attributes(code: str) -> dict[str, str]:
    """Document-level ``lang`` and ``dir`` attributes for a language."""
    return {"lang": code, "dir": get_text_direction(code).value}


def get_language_info(locale: str) -> dict[str, str | bool]:
    """Return a metadata dict describing the given locale.

    Args:
        locale: Language code, e.g. "ar", "fr".

    Returns:
        Dict with keys: ``code``, ``name``, ``native_name`` and ``is_rtl``.
    """
    return {
        "code": locale,
        "name": LANGUAGE_NAMES.get(locale, locale),
        "native_name": NATIVE_LANGUAGE_NAMES.get(locale, locale),
        "is_rtl": is_rtl_locale(locale),
    }
