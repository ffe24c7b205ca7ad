"""
Application configuration row editable by administrators.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class AppConfig(Base):
    """Runtime application settings stored in the database (a single row)."""

    __tablename__ = "app_config"

    app_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    version: Mapped[str] = mapped_column(String(50), nullable=False)
