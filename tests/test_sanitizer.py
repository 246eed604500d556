"""
Tests for settings form sanitization.
"""

import pytest

from smtp_settings.schemas.smtp_settings import DEFAULT_SETTINGS, SettingsRecord
from smtp_settings.services.sanitizer import sanitize_settings

STORED = SettingsRecord.from_stored({"smtp_pass": "stored-secret", "enable_smtp": "1"})


class TestPassword:
    @pytest.mark.parametrize("raw", [{}, {"smtp_pass": ""}, {"smtp_pass": None}])
    def test_empty_submission_keeps_stored_password(self, raw):
        assert sanitize_settings(raw, STORED).smtp_pass == "stored-secret"

    def test_empty_submission_without_previous_record(self):
        assert sanitize_settings({"smtp_pass": ""}, None).smtp_pass == ""

    def test_new_password_taken_verbatim(self):
        password = "  p@ss <word>\t"
        assert sanitize_settings({"smtp_pass": password}, STORED).smtp_pass == password


class TestFields:
    def test_empty_submission_yields_complete_record(self):
        result = sanitize_settings({}, None)
        assert set(result.to_storage()) == set(DEFAULT_SETTINGS)
        assert result.enable_smtp == "0"
        assert result.smtp_auth == "0"
        assert result.smtp_secure == "tls"
        assert result.smtp_port == "0"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (" 465 ", "465"),
            ("2525", "2525"),
            ("587.0", "587"),
            (587.9, "587"),
            ("-25", "0"),
            ("abc", "0"),
            ("inf", "0"),
            ("", "0"),
            (None, "0"),
        ],
    )
    def test_port_coercion(self, raw, expected):
        assert sanitize_settings({"smtp_port": raw}, None).smtp_port == expected

    def test_flags_follow_key_presence(self):
        result = sanitize_settings({"enable_smtp": "1", "smtp_auth": "on"}, None)
        assert result.enable_smtp == "1"
        assert result.smtp_auth == "1"

        result = sanitize_settings({"enable_smtp": False, "smtp_auth": None}, None)
        assert result.enable_smtp == "0"
        assert result.smtp_auth == "0"

    @pytest.mark.parametrize("secure, expected", [("", ""), ("ssl", "ssl"), ("tls", "tls"), ("starttls", "tls"), (None, "tls")])
    def test_secure_mode_whitelist(self, secure, expected):
        assert sanitize_settings({"smtp_secure": secure}, None).smtp_secure == expected

    def test_text_fields_are_cleaned(self):
        result = sanitize_settings(
            {
                "smtp_host": "  <b>smtp.example.com</b>\n",
                "smtp_user": "user\tname",
                "from_name": "<script>alert(1)</script>Mój   Sklep",
            },
            None,
        )
        assert result.smtp_host == "smtp.example.com"
        assert result.smtp_user == "user name"
        assert result.from_name == "Mój Sklep"

    def test_malformed_addresses_become_empty(self):
        result = sanitize_settings(
            {"from_email": "not an email", "admin_email": "a@", "test_email": 42},
            None,
        )
        assert result.from_email == ""
        assert result.admin_email == ""
        assert result.test_email == ""

    def test_valid_addresses_are_kept(self):
        result = sanitize_settings(
            {"from_email": " shop@example.com ", "admin_email": "x@y.com", "test_email": "t@example.org"},
            None,
        )
        assert result.from_email == "shop@example.com"
        assert result.admin_email == "x@y.com"
        assert result.test_email == "t@example.org"

    def test_internal_relay_domains_are_kept(self):
        result = sanitize_settings(
            {"from_email": "ops@mail.local", "admin_email": "qa@relay.test", "test_email": "dev@box.localhost"},
            None,
        )
        assert result.from_email == "ops@mail.local"
        assert result.admin_email == "qa@relay.test"
        assert result.test_email == "dev@box.localhost"
