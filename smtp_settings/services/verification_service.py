"""Sends a one-off test message to verify the stored SMTP settings."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from smtp_settings.config import settings
from smtp_settings.exceptions import (
    ConfigurationException,
    ForbiddenException,
    InvalidNonceException,
    TransportException,
)
from smtp_settings.schemas.smtp_settings import SettingsRecord
from smtp_settings.services.email_service import get_email_service
from smtp_settings.services.i18n_service import get_i18n_service
from smtp_settings.services.settings_store import get_settings_store
from smtp_settings.utils.email_address import is_email, sanitize_email
from smtp_settings.utils.permissions import Capability, Principal
from smtp_settings.utils.security import NONCE_TEST_EMAIL, verify_nonce

logger = logging.getLogger(__name__)


def resolve_recipient(requested: str | None, record: SettingsRecord) -> str:
    """Pick the test recipient: request, stored test address, stored admin
    address, then the system administrator address. First valid one wins."""
    candidate = sanitize_email(requested) if requested else ""
    if candidate and is_email(candidate):
        return candidate
    if record.test_email and is_email(record.test_email):
        return record.test_email
    if record.admin_email and is_email(record.admin_email):
        return record.admin_email
    return settings.admin_email


def _current_time() -> str:
    return datetime.now(ZoneInfo(settings.app_timezone)).strftime("%Y-%m-%d %H:%M:%S")


class VerificationEmailService:
    """Checks a test-send request and dispatches the test message."""

    async def send_test_email(
        self,
        db: AsyncSession,
        principal: Principal,
        nonce: str | None,
        recipient: str | None = None,
        lang: str | None = None,
    ) -> str:
        """Send the test message and return the success text.

        Raises, in check order:
            InvalidNonceException: the authenticity token does not verify
            ForbiddenException: the principal cannot manage options
            ConfigurationException: SMTP disabled, no host, bad sender or recipient
            TransportException: the mail server rejected or was unreachable
        """
        i18n = get_i18n_service()

        if not verify_nonce(nonce, NONCE_TEST_EMAIL, principal.user_id):
            raise InvalidNonceException(i18n.t("settings.invalid_nonce", lang))

        if not principal.can(Capability.MANAGE_OPTIONS):
            raise ForbiddenException(i18n.t("settings.no_permission", lang))

        record = await get_settings_store().get_record(db)

        if not record.smtp_enabled:
            raise ConfigurationException(i18n.t("test_email.smtp_disabled", lang))

        if not record.smtp_host:
            raise ConfigurationException(i18n.t("test_email.missing_host", lang))

        if not record.from_email or not is_email(record.from_email):
            raise ConfigurationException(i18n.t("test_email.invalid_from_email", lang))

        to = resolve_recipient(recipient, record)
        if not is_email(to):
            raise ConfigurationException(i18n.t("test_email.invalid_recipient", lang))

        sent_at = _current_time()
        subject = i18n.t("test_email.subject", lang, app_name=settings.app_name, time=sent_at)

        email_service = get_email_service()
        body = email_service.render_template(
            "smtp_test.html",
            {
                "lang": lang,
                "host": record.smtp_host,
                "port": record.smtp_port,
                "secure": record.smtp_secure,
                "auth_enabled": record.auth_enabled,
                "sender": record.from_email,
                "recipient": to,
                "sent_at": sent_at,
            },
        )

        logger.info(f"Sending SMTP test email to {to} via {record.smtp_host}:{record.smtp_port}")
        result = await email_service.send(
            db,
            to=to,
            subject=subject,
            html_body=body,
            from_email=record.from_email,
            from_name=record.from_name,
        )

        if not result.success:
            if result.error:
                message = i18n.t("test_email.failed_with_error", lang, error=result.error)
            else:
                message = i18n.t("test_email.failed", lang)
            raise TransportException(message, detail=result.error)

        return i18n.t("test_email.sent", lang, recipient=to)


# Singleton instance
_verification_service: VerificationEmailService | None = None


def get_verification_service() -> VerificationEmailService:
    """Get the verification email service singleton."""
    global _verification_service
    if _verification_service is None:
        _verification_service = VerificationEmailService()
    return _verification_service
