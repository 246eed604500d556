"""Turns a raw settings form submission into a complete settings record."""

from collections.abc import Mapping
from typing import Any

from smtp_settings.schemas.smtp_settings import (
    FLAG_OFF,
    FLAG_ON,
    SECURE_MODES,
    SettingsRecord,
)
from smtp_settings.utils.email_address import sanitize_email
from smtp_settings.utils.text import sanitize_text_field, to_port


def _flag(raw: Mapping[str, Any], key: str) -> str:
    # Checkboxes are only posted when ticked; JSON clients may send false
    value = raw.get(key)
    return FLAG_ON if value is not None and value is not False else FLAG_OFF


def sanitize_settings(raw: Mapping[str, Any], previous: SettingsRecord | None = None) -> SettingsRecord:
    """Clean a submission against the currently stored record.

    An empty or missing password keeps the stored one. A non-empty password
    is taken verbatim, whitespace included.
    """
    secure = raw.get("smtp_secure")

    password = raw.get("smtp_pass")
    if not password:
        password = previous.smtp_pass if previous else ""

    return SettingsRecord(
        smtp_host=sanitize_text_field(raw.get("smtp_host")),
        smtp_port=str(to_port(raw.get("smtp_port"))),
        smtp_auth=_flag(raw, "smtp_auth"),
        smtp_user=sanitize_text_field(raw.get("smtp_user")),
        smtp_pass=str(password),
        smtp_secure=secure if secure in SECURE_MODES else "tls",
        from_email=sanitize_email(raw.get("from_email")),
        from_name=sanitize_text_field(raw.get("from_name")),
        enable_smtp=_flag(raw, "enable_smtp"),
        admin_email=sanitize_email(raw.get("admin_email")),
        test_email=sanitize_email(raw.get("test_email")),
    )
