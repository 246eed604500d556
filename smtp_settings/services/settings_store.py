"""Persistence for settings records in the system_settings table."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smtp_settings.models.system_settings import SystemSettings
from smtp_settings.schemas.smtp_settings import DEFAULT_SETTINGS, SettingsRecord

logger = logging.getLogger(__name__)

SMTP_SETTINGS_KEY = "smtp_settings"


class SettingsStore:
    """Key-value access to whole settings records."""

    async def get(self, db: AsyncSession, key: str) -> dict[str, Any] | None:
        """Return the stored value for a key, or None if absent."""
        result = await db.execute(
            select(SystemSettings).where(SystemSettings.key == key)
        )
        row = result.scalar_one_or_none()
        return dict(row.value) if row else None

    async def set(self, db: AsyncSession, key: str, value: dict[str, Any]) -> None:
        """Replace the stored value for a key, creating the row if needed."""
        result = await db.execute(
            select(SystemSettings).where(SystemSettings.key == key)
        )
        row = result.scalar_one_or_none()

        if row:
            row.value = dict(value)
        else:
            row = SystemSettings(key=key, value=dict(value))
            db.add(row)

        await db.flush()

    async def get_record(self, db: AsyncSession) -> SettingsRecord:
        """Load the SMTP settings, writing the defaults on first access."""
        value = await self.get(db, SMTP_SETTINGS_KEY)
        if value is None:
            logger.info("No SMTP settings stored yet, creating defaults")
            await self.set(db, SMTP_SETTINGS_KEY, DEFAULT_SETTINGS)
        return SettingsRecord.from_stored(value)

    async def save_record(self, db: AsyncSession, record: SettingsRecord) -> None:
        """Persist a sanitized SMTP settings record."""
        await self.set(db, SMTP_SETTINGS_KEY, record.to_storage())
        logger.info(
            f"SMTP settings saved (enabled={record.enable_smtp}, "
            f"host={record.smtp_host!r}, port={record.smtp_port})"
        )


# Singleton instance
_settings_store: SettingsStore | None = None


def get_settings_store() -> SettingsStore:
    """Get the settings store singleton."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SettingsStore()
    return _settings_store
