"""
Tests for the advisory configuration checks.
"""

import pytest

from smtp_settings.schemas.smtp_settings import SettingsRecord
from smtp_settings.services.validation import check_configuration_issues

VALID = {
    "enable_smtp": "1",
    "smtp_host": "smtp.example.com",
    "smtp_port": "587",
    "smtp_auth": "1",
    "smtp_user": "mailer",
    "smtp_pass": "secret",
    "smtp_secure": "tls",
    "from_email": "sender@example.com",
    "from_name": "Sklep",
    "admin_email": "admin@example.org",
}


def record(**overrides) -> SettingsRecord:
    return SettingsRecord.from_stored({**VALID, **overrides})


class TestDisabledConfiguration:
    @pytest.mark.parametrize("flag", ["0", "", "yes", "true"])
    def test_never_flagged_when_not_enabled(self, flag):
        broken = record(
            enable_smtp=flag,
            smtp_host="",
            smtp_port="abc",
            from_email="nope",
            smtp_user="",
            smtp_pass="",
            admin_email="bad",
        )
        assert check_configuration_issues(broken) == []


class TestEnabledConfiguration:
    def test_valid_configuration_has_no_issues(self):
        assert check_configuration_issues(record()) == []

    def test_internal_relay_domains_are_valid(self):
        assert check_configuration_issues(record(from_email="ops@mail.local", admin_email="qa@relay.test")) == []

    def test_missing_host_only(self):
        snapshot = SettingsRecord.from_stored(
            {
                "enable_smtp": "1",
                "smtp_host": "",
                "smtp_port": "587",
                "from_email": "a@b.com",
                "smtp_auth": "0",
            }
        )
        assert check_configuration_issues(snapshot) == ["Nie skonfigurowano serwera SMTP."]

    def test_missing_credentials_username_first(self):
        issues = check_configuration_issues(record(smtp_user="", smtp_pass=""))
        assert issues == [
            "Włączono uwierzytelnianie, ale nie podano nazwy użytkownika.",
            "Włączono uwierzytelnianie, ale nie podano hasła.",
        ]

    def test_credentials_ignored_without_auth(self):
        assert check_configuration_issues(record(smtp_auth="0", smtp_user="", smtp_pass="")) == []

    @pytest.mark.parametrize("port", ["", "0", "abc", "58 7"])
    def test_unusable_port(self, port):
        assert check_configuration_issues(record(smtp_port=port)) == ["Port SMTP jest nieprawidłowy."]

    def test_missing_sender(self):
        assert check_configuration_issues(record(from_email="")) == [
            "Adres e-mail nadawcy nie jest ustawiony."
        ]

    def test_invalid_sender_is_escaped(self):
        issues = check_configuration_issues(record(from_email="<b>x</b>"))
        assert issues == ["Adres e-mail nadawcy jest nieprawidłowy: &lt;b&gt;x&lt;/b&gt;"]

    def test_all_problems_in_fixed_order(self):
        issues = check_configuration_issues(
            record(
                smtp_host="",
                smtp_port="abc",
                from_email="not-an-email",
                smtp_user="",
                smtp_pass="",
                admin_email="bad@",
            )
        )
        assert issues == [
            "Nie skonfigurowano serwera SMTP.",
            "Port SMTP jest nieprawidłowy.",
            "Adres e-mail nadawcy jest nieprawidłowy: not-an-email",
            "Włączono uwierzytelnianie, ale nie podano nazwy użytkownika.",
            "Włączono uwierzytelnianie, ale nie podano hasła.",
            "Adres e-mail do testów jest nieprawidłowy: bad@",
        ]

    def test_english_messages(self):
        assert check_configuration_issues(record(smtp_host=""), lang="en") == [
            "SMTP server is not configured."
        ]

    def test_unknown_language_uses_default_catalog(self):
        assert check_configuration_issues(record(smtp_host=""), lang="de") == [
            "Nie skonfigurowano serwera SMTP."
        ]
