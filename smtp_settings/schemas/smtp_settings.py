"""Schemas for the stored SMTP settings record and the admin actions."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

FLAG_ON = "1"
FLAG_OFF = "0"
SECURE_MODES = ("", "tls", "ssl")

DEFAULT_SETTINGS: dict[str, str] = {
    "smtp_host": "",
    "smtp_port": "587",
    "smtp_auth": FLAG_OFF,
    "smtp_user": "",
    "smtp_pass": "",
    "smtp_secure": "tls",
    "from_email": "",
    "from_name": "",
    "enable_smtp": FLAG_OFF,
    "admin_email": "",
    "test_email": "",
}


class SettingsRecord(BaseModel):
    """Read-only snapshot of the stored SMTP settings.

    Every value is a string; flags are "0"/"1" and the port is a
    non-negative integer written out as text.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    smtp_host: str = DEFAULT_SETTINGS["smtp_host"]
    smtp_port: str = DEFAULT_SETTINGS["smtp_port"]
    smtp_auth: str = DEFAULT_SETTINGS["smtp_auth"]
    smtp_user: str = DEFAULT_SETTINGS["smtp_user"]
    smtp_pass: str = DEFAULT_SETTINGS["smtp_pass"]
    smtp_secure: str = DEFAULT_SETTINGS["smtp_secure"]
    from_email: str = DEFAULT_SETTINGS["from_email"]
    from_name: str = DEFAULT_SETTINGS["from_name"]
    enable_smtp: str = DEFAULT_SETTINGS["enable_smtp"]
    admin_email: str = DEFAULT_SETTINGS["admin_email"]
    test_email: str = DEFAULT_SETTINGS["test_email"]

    @classmethod
    def from_stored(cls, value: Mapping[str, Any] | None) -> "SettingsRecord":
        """Merge a stored mapping over the defaults.

        Missing or null keys take their default; anything else is coerced to
        text so older rows holding integers still load.
        """
        merged = dict(DEFAULT_SETTINGS)
        for key, item in (value or {}).items():
            if key in merged and item is not None:
                merged[key] = str(item)
        return cls(**merged)

    @property
    def smtp_enabled(self) -> bool:
        return self.enable_smtp == FLAG_ON

    @property
    def auth_enabled(self) -> bool:
        return self.smtp_auth == FLAG_ON

    def to_storage(self) -> dict[str, str]:
        """Plain dict for the settings store."""
        return self.model_dump()

    def masked(self) -> dict[str, Any]:
        """Dict safe to hand to a browser: the password never leaves the server."""
        data = self.model_dump()
        data["has_password"] = bool(data.pop("smtp_pass"))
        return data


class SaveSettingsRequest(BaseModel):
    """Raw form submission for the save action."""

    nonce: str = ""
    settings: dict[str, Any] = Field(default_factory=dict)


class TestEmailRequest(BaseModel):
    """Optional recipient for the test email."""

    nonce: str = ""
    to: str | None = None
