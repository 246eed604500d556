"""Simple SMTP Settings: administrator-managed outbound mail configuration."""

__version__ = "1.0.0"
