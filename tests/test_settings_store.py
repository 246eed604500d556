"""
Tests for the settings store.
"""

import pytest

from smtp_settings.schemas.smtp_settings import DEFAULT_SETTINGS, SettingsRecord
from smtp_settings.services.settings_store import SMTP_SETTINGS_KEY, SettingsStore


@pytest.mark.asyncio
async def test_defaults_written_on_first_access(db_session):
    store = SettingsStore()
    assert await store.get(db_session, SMTP_SETTINGS_KEY) is None

    record = await store.get_record(db_session)

    assert record == SettingsRecord()
    assert record.smtp_port == "587"
    assert record.smtp_secure == "tls"
    assert await store.get(db_session, SMTP_SETTINGS_KEY) == DEFAULT_SETTINGS


@pytest.mark.asyncio
async def test_save_replaces_stored_record(db_session):
    store = SettingsStore()
    await store.get_record(db_session)

    saved = SettingsRecord.from_stored({"enable_smtp": "1", "smtp_host": "smtp.example.com"})
    await store.save_record(db_session, saved)

    assert await store.get_record(db_session) == saved


@pytest.mark.asyncio
async def test_partial_rows_are_merged_with_defaults(db_session):
    store = SettingsStore()
    await store.set(db_session, SMTP_SETTINGS_KEY, {"smtp_port": 465, "smtp_host": "mx.example.com"})

    record = await store.get_record(db_session)

    assert record.smtp_port == "465"
    assert record.smtp_host == "mx.example.com"
    assert record.enable_smtp == "0"
    assert record.from_email == ""
