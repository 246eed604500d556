"""Sender identity overrides applied to every outbound message."""

from smtp_settings.schemas.smtp_settings import SettingsRecord
from smtp_settings.utils.email_address import is_email


def override_from_email(candidate: str, record: SettingsRecord) -> str:
    if not record.smtp_enabled:
        return candidate
    if record.from_email and is_email(record.from_email):
        return record.from_email
    return candidate


def override_from_name(candidate: str, record: SettingsRecord) -> str:
    if not record.smtp_enabled:
        return candidate
    if record.from_name:
        return record.from_name
    return candidate


def apply_from_filters(from_email: str, from_name: str, record: SettingsRecord) -> tuple[str, str]:
    """Run both sender overrides over a candidate identity."""
    return override_from_email(from_email, record), override_from_name(from_name, record)
