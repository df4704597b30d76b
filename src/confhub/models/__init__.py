"""Database models - SQLAlchemy 2.0 async models."""

from confhub.models.base import Base, TimestampMixin
from confhub.models.setting import Setting

__all__ = [
    "Base",
    "Setting",
    "TimestampMixin",
]
