"""Advisory checks over the stored SMTP settings."""

import re

from markupsafe import escape

from smtp_settings.schemas.smtp_settings import SettingsRecord
from smtp_settings.services.i18n_service import get_i18n_service
from smtp_settings.utils.email_address import is_email

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def _is_numeric(value: str) -> bool:
    return bool(_NUMERIC_RE.match(value))


def check_configuration_issues(record: SettingsRecord, lang: str | None = None) -> list[str]:
    """List human-readable problems with an enabled configuration.

    A disabled configuration is never flagged. The order of the messages is
    fixed: host, port, sender address, credentials, test address.
    """
    if not record.smtp_enabled:
        return []

    i18n = get_i18n_service()
    issues: list[str] = []

    if not record.smtp_host:
        issues.append(i18n.t("issues.missing_host", lang))

    # "0" is what the sanitizer stores for an unusable port
    if not record.smtp_port or record.smtp_port == "0" or not _is_numeric(record.smtp_port):
        issues.append(i18n.t("issues.invalid_port", lang))

    if not record.from_email:
        issues.append(i18n.t("issues.missing_from_email", lang))
    elif not is_email(record.from_email):
        issues.append(i18n.t("issues.invalid_from_email", lang, value=escape(record.from_email)))

    if record.auth_enabled:
        if not record.smtp_user:
            issues.append(i18n.t("issues.missing_user", lang))
        if not record.smtp_pass:
            issues.append(i18n.t("issues.missing_pass", lang))

    if record.admin_email and not is_email(record.admin_email):
        issues.append(i18n.t("issues.invalid_admin_email", lang, value=escape(record.admin_email)))

    return issues
