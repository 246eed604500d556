"""Outbound mail transport configuration and delivery over aiosmtplib."""

import logging
from dataclasses import dataclass
from email.message import Message
from typing import Any

import aiosmtplib

from smtp_settings.config import settings
from smtp_settings.schemas.smtp_settings import SettingsRecord
from smtp_settings.utils.email_address import is_email

logger = logging.getLogger(__name__)

MAILER_LOCAL = "local"
MAILER_SMTP = "smtp"

DEBUG_LEVEL_OFF = 0
DEBUG_LEVEL_SERVER = 2


@dataclass
class TransportConfig:
    """Connection and sender parameters for one outbound message."""

    mailer: str = MAILER_LOCAL
    host: str = "localhost"
    port: int = 25
    smtp_auth: bool = False
    username: str | None = None
    password: str | None = None
    secure: str = ""
    auto_tls: bool = True
    from_email: str = ""
    from_name: str = ""
    sender: str = ""
    verify_certificates: bool = True
    debug_level: int = DEBUG_LEVEL_OFF
    timeout: int = 30

    def connection_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``aiosmtplib.send``."""
        kwargs: dict[str, Any] = {
            "hostname": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "validate_certs": self.verify_certificates,
        }

        if self.secure == "ssl":
            kwargs.update(use_tls=True, start_tls=False)
        elif self.secure == "tls":
            kwargs.update(use_tls=False, start_tls=True)
        else:
            # None lets aiosmtplib upgrade when the server offers STARTTLS
            kwargs.update(use_tls=False, start_tls=None if self.auto_tls else False)

        if self.smtp_auth:
            kwargs.update(username=self.username, password=self.password)

        return kwargs


def default_transport_config() -> TransportConfig:
    """The ambient transport: the local relay with the system sender."""
    return TransportConfig(
        mailer=MAILER_LOCAL,
        host=settings.mail_default_host,
        port=settings.mail_default_port,
        from_email=settings.email_from_address,
        from_name=settings.effective_from_name,
        sender=settings.email_from_address,
        timeout=settings.smtp_timeout,
    )


def configure_transport(transport: TransportConfig, record: SettingsRecord) -> None:
    """Apply the stored SMTP settings to a transport.

    With the override disabled the transport is left untouched. An empty
    security mode means plaintext with no automatic STARTTLS upgrade.
    """
    if not record.smtp_enabled:
        return

    transport.mailer = MAILER_SMTP
    transport.host = record.smtp_host
    transport.port = int(record.smtp_port) if record.smtp_port.isdigit() else 0

    if record.auth_enabled:
        transport.smtp_auth = True
        transport.username = record.smtp_user
        transport.password = record.smtp_pass
    else:
        transport.smtp_auth = False
        transport.username = None
        transport.password = None

    if record.smtp_secure:
        transport.secure = record.smtp_secure
    else:
        transport.secure = ""
        transport.auto_tls = False

    if record.from_email and is_email(record.from_email):
        sender = record.from_email
    else:
        sender = settings.admin_email
    transport.from_email = sender
    transport.sender = sender

    transport.from_name = record.from_name or settings.app_name

    transport.verify_certificates = settings.smtp_verify_certificates

    if settings.app_debug:
        transport.debug_level = DEBUG_LEVEL_SERVER


def _enable_debug_output() -> None:
    """Raise SMTP session logging to DEBUG; the root handler writes to stderr."""
    logging.getLogger("aiosmtplib").setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


class MailTransport:
    """Delivers messages with a given transport configuration.

    ``error_info`` keeps the last delivery error, reset before each send.
    """

    def __init__(self, config: TransportConfig):
        self.config = config
        self.error_info = ""

    async def send(self, message: Message, recipients: list[str]) -> bool:
        """Send a message; returns False and records the error on failure."""
        self.error_info = ""
        config = self.config

        if config.debug_level >= DEBUG_LEVEL_SERVER:
            _enable_debug_output()
            logger.debug(
                f"Connecting via {config.mailer} to {config.host}:{config.port} "
                f"(secure={config.secure or 'none'}, auto_tls={config.auto_tls}, "
                f"auth={config.smtp_auth}, verify_certs={config.verify_certificates})"
            )

        try:
            await aiosmtplib.send(
                message,
                sender=config.sender or None,
                recipients=recipients,
                **config.connection_kwargs(),
            )
        except aiosmtplib.SMTPException as e:
            self.error_info = str(e)
            logger.error(f"SMTP error sending to {recipients} via {config.host}:{config.port}: {e}")
            return False
        except OSError as e:
            self.error_info = str(e)
            logger.error(f"Could not connect to {config.host}:{config.port}: {e}")
            return False

        logger.info(f"Message sent via {config.mailer} to {recipients}")
        return True
