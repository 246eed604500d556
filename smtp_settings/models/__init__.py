"""SQLAlchemy models for Simple SMTP Settings."""

from smtp_settings.models.base import Base, BaseModel, TimestampMixin
from smtp_settings.models.system_settings import SystemSettings

__all__ = ["Base", "BaseModel", "TimestampMixin", "SystemSettings"]
