"""Pydantic schemas for request/response validation."""

from smtp_settings.schemas.common import APIResponse
from smtp_settings.schemas.smtp_settings import (
    DEFAULT_SETTINGS,
    SaveSettingsRequest,
    SettingsRecord,
    TestEmailRequest,
)

__all__ = [
    "APIResponse",
    "DEFAULT_SETTINGS",
    "SaveSettingsRequest",
    "SettingsRecord",
    "TestEmailRequest",
]
