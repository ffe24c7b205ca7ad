"""
Application configuration service.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import ActivityKind, AppConfig
from geventos_platform.schemas.config import AppConfigUpdate
from geventos_platform.services.activity_service import ActivityService
from geventos_platform.utils.exceptions import ConfigNotFoundError, ValidationError


class ConfigService:
    """Reads and edits the single application configuration row."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activities = ActivityService(db)

    async def get_config(self) -> AppConfig:
        result = await self.db.execute(select(AppConfig).order_by(AppConfig.id).limit(1))
        config = result.scalar_one_or_none()
        if config is None:
            raise ConfigNotFoundError()
        return config

    async def update_config(
        self,
        config_data: AppConfigUpdate,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> AppConfig:
        """
        Apply a partial update to the configuration row.

        Raises:
            ConfigNotFoundError: If no configuration row exists
            ValidationError: If no fields were provided
        """
        changes = config_data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields provided to update")

        config = await self.get_config()
        for field, value in changes.items():
            setattr(config, field, str(value))

        self.activities.record(
            ActivityKind.OTHER,
            "Configuración de la aplicación actualizada",
            details=", ".join(sorted(changes)),
            user_id=user_id,
            ip_address=ip_address
        )
        await self.db.commit()
        return config
