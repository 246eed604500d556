"""Email service: the single outbound path for application mail.

Every message picks up the stored SMTP settings: the sender identity is run
through the From overrides, then the transport is configured from the record.
"""

import logging
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy.ext.asyncio import AsyncSession

from smtp_settings.config import settings
from smtp_settings.services.i18n_service import get_i18n_service
from smtp_settings.services.mail_filters import apply_from_filters
from smtp_settings.services.mail_transport import (
    MailTransport,
    configure_transport,
    default_transport_config,
)
from smtp_settings.services.settings_store import get_settings_store

logger = logging.getLogger(__name__)


@dataclass
class DeliveryResult:
    """Outcome of one send attempt."""

    success: bool
    error: str | None = None


class EmailService:
    """Service for composing and sending email through the configured transport."""

    def __init__(self):
        """Initialize the email service."""
        templates_path = Path(__file__).parent.parent / "templates" / "emails"
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.jinja_env.globals["t"] = get_i18n_service().t

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render an email template with the given context."""
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    async def send(
        self,
        db: AsyncSession,
        to: str | list[str],
        subject: str,
        html_body: str,
        from_email: str | None = None,
        from_name: str | None = None,
    ) -> DeliveryResult:
        """Send an HTML email.

        Args:
            from_email: Explicit sender address; the system default otherwise.
            from_name: Explicit sender name; the system default otherwise.

        Returns a DeliveryResult carrying the transport error on failure.
        """
        record = await get_settings_store().get_record(db)
        recipients = to if isinstance(to, list) else [to]

        sender_email, sender_name = apply_from_filters(
            from_email or settings.email_from_address,
            from_name or settings.effective_from_name,
            record,
        )

        transport_config = default_transport_config()
        transport_config.from_email = sender_email
        transport_config.from_name = sender_name
        transport_config.sender = sender_email
        configure_transport(transport_config, record)

        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((transport_config.from_name, transport_config.from_email))
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        transport = MailTransport(transport_config)
        if await transport.send(msg, recipients):
            return DeliveryResult(success=True)
        return DeliveryResult(success=False, error=transport.error_info or None)


# Singleton instance
_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
