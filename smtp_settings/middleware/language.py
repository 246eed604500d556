"""Language detection middleware."""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from smtp_settings.config import settings
from smtp_settings.utils.request_context import set_current_language


class LanguageMiddleware(BaseHTTPMiddleware):
    """Sets the request language used for user-facing messages."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        set_current_language(self._detect_language(request))
        return await call_next(request)

    def _detect_language(self, request: Request) -> str:
        """Detect preferred language from request.

        Priority:
        1. Query parameter: ?lang=en
        2. Cookie: language=en
        3. Accept-Language header
        4. Default language from settings
        """
        supported = settings.supported_languages_list

        lang = request.query_params.get("lang")
        if lang and lang in supported:
            return lang

        lang = request.cookies.get("language")
        if lang and lang in supported:
            return lang

        for lang in self._parse_accept_language(request.headers.get("Accept-Language", "")):
            if lang in supported:
                return lang

        return settings.default_language

    def _parse_accept_language(self, header: str) -> list[str]:
        """Parse Accept-Language header and return languages in preference order.

        Example header: pl-PL,pl;q=0.9,en;q=0.8
        """
        if not header:
            return []

        languages = []
        for part in header.split(","):
            part = part.strip()
            if not part:
                continue

            if ";q=" in part:
                lang, q = part.split(";q=", 1)
                try:
                    quality = float(q)
                except ValueError:
                    quality = 0.0
            else:
                lang = part
                quality = 1.0

            languages.append((lang.split("-")[0].lower(), quality))

        languages.sort(key=lambda item: item[1], reverse=True)
        return [lang for lang, _ in languages]
