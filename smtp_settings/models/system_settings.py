"""SystemSettings model for application-wide configuration."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from smtp_settings.models.base import BaseModel


class SystemSettings(BaseModel):
    """Key-value store for application-wide settings.

    Each row holds one whole settings record under a fixed logical key
    (e.g., the SMTP configuration managed from the admin screen).
    """

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    value: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
