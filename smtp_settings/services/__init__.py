"""Service layer for business logic."""

from smtp_settings.services.email_service import EmailService, get_email_service
from smtp_settings.services.i18n_service import I18nService, get_i18n_service
from smtp_settings.services.settings_store import SettingsStore, get_settings_store
from smtp_settings.services.verification_service import (
    VerificationEmailService,
    get_verification_service,
)

__all__ = [
    "EmailService",
    "get_email_service",
    "I18nService",
    "get_i18n_service",
    "SettingsStore",
    "get_settings_store",
    "VerificationEmailService",
    "get_verification_service",
]
