"""
Application configuration API endpoints.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.common import ERROR_RESPONSES
from geventos_platform.schemas.config import AppConfigResponse, AppConfigUpdate
from geventos_platform.services.config_service import ConfigService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import get_client_ip, require_admin, require_any_role


router = APIRouter(prefix="/config", tags=["config"])


def get_config_service(db: AsyncSession = Depends(get_db)) -> ConfigService:
    """Dependency to get config service instance."""
    return ConfigService(db)


@router.get("", response_model=AppConfigResponse, responses=ERROR_RESPONSES)
async def get_config(
    current_user: TokenData = Depends(require_any_role),
    config_service: ConfigService = Depends(get_config_service)
):
    config = await config_service.get_config()
    return AppConfigResponse.from_config(config)


@router.put("", response_model=AppConfigResponse, responses=ERROR_RESPONSES)
async def update_config(
    config_data: AppConfigUpdate,
    request: Request,
    current_user: TokenData = Depends(require_admin),
    config_service: ConfigService = Depends(get_config_service)
):
    """Partially update the application configuration. Admin only."""
    config = await config_service.update_config(
        config_data,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )
    return AppConfigResponse.from_config(config)
