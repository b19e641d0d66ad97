"""
Language Detection Middleware

Sets request.state.locale and request.state.text_direction from the leading
segment of the request path ("/ar/articles" → ar, rtl). Paths without a
supported prefix resolve to the default language.

No DB lookups, only path parsing. The resolved values are mirrored on the
response as ``Content-Language`` and ``X-Text-Direction`` so the rendering
layer can set the document ``lang`` and ``dir`` attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from lingopress.i18n.locale import html_attributes, resolve_locale

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve the request locale from its path on every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        resolved = resolve_locale(request.url.path)
        attributes = html_attributes(resolved.language_code.value)
        request.state.locale = attributes["lang"]
        request.state.text_direction = attributes["dir"]

        response = await call_next(request)
        response.headers["Content-Language"] = attributes["lang"]
        response.headers["X-Text-Direction"] = attributes["dir"]
        return response
