"""
FastAPI dependencies for authentication and authorization.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .auth import ALL_ROLES, STAFF_ROLES, Role, TokenData, verify_token
from .exceptions import AuthenticationError, AuthorizationError
from .logging_config import log_security_event


# Missing credentials are reported through AuthenticationError, not FastAPI's default
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenData:
    """
    Get the caller's identity from the bearer token.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if credentials is None:
        raise AuthenticationError("Authentication token required")

    token_data = verify_token(credentials.credentials)
    if token_data is None:
        log_security_event(
            "invalid_token",
            {"path": request.url.path, "client_ip": request.client.host if request.client else None}
        )
        raise AuthenticationError("Invalid or expired token")

    request.state.user = token_data
    return token_data


def require_roles(*roles: Role):
    """
    Build a dependency that admits only callers holding one of ``roles``.

    Returns:
        Dependency resolving to the caller's TokenData
    """
    allowed = {role.value for role in roles}

    async def dependency(current_user: TokenData = Depends(get_current_user)) -> TokenData:
        if current_user.role not in allowed:
            log_security_event(
                "role_denied",
                {"user_id": current_user.user_id, "role": current_user.role, "required_roles": sorted(allowed)}
            )
            raise AuthorizationError(
                "Not enough permissions",
                required_roles=sorted(allowed)
            )
        return current_user

    return dependency


require_any_role = require_roles(*ALL_ROLES)
require_staff = require_roles(*STAFF_ROLES)
require_admin = require_roles(Role.ADMINISTRATOR)


def get_client_ip(request: Request) -> Optional[str]:
    """Caller address recorded in the activity log."""
    return request.client.host if request.client else None
