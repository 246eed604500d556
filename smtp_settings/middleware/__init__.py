"""Middleware exports."""

from smtp_settings.middleware.auth import AuthMiddleware
from smtp_settings.middleware.language import LanguageMiddleware

__all__ = ["AuthMiddleware", "LanguageMiddleware"]
