"""
Application configuration schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import PartialUpdate
from ..models.app_config import AppConfig


class AppConfigUpdate(PartialUpdate):
    """Schema for a partial configuration update."""

    app_name: Optional[str] = Field(None, alias="nombreAplicacion", min_length=1, max_length=255)
    contact_email: Optional[EmailStr] = Field(None, alias="contactoEmail")
    version: Optional[str] = Field(None, min_length=1, max_length=50)


class AppConfigResponse(BaseModel):
    """Schema for configuration responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="configID")
    app_name: str = Field(..., alias="nombreAplicacion")
    contact_email: str = Field(..., alias="contactoEmail")
    version: str

    @classmethod
    def from_config(cls, config: AppConfig) -> "AppConfigResponse":
        return cls(
            id=config.id,
            app_name=config.app_name,
            contact_email=config.contact_email,
            version=config.version,
        )
