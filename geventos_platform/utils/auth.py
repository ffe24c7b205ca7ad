"""
JWT token utilities.

Tokens are issued by the identity service; this module verifies them and can
mint tokens for tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from ..config import get_settings


class Role(str, Enum):
    """Roles carried in the ``role`` claim."""
    ORGANIZER = "ORGANIZADOR"
    ADMINISTRATOR = "ADMINISTRADOR"
    ATTENDEE = "ASISTENTE"


STAFF_ROLES = (Role.ORGANIZER, Role.ADMINISTRATOR)
ALL_ROLES = (Role.ORGANIZER, Role.ADMINISTRATOR, Role.ATTENDEE)


class TokenData(BaseModel):
    """Token data model for JWT payload."""
    user_id: int
    role: Optional[str] = None


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: The claims to encode; ``sub`` is the user id and ``role`` the role name
        expires_delta: Optional custom expiration time

    Returns:
        The encoded JWT token
    """
    settings = get_settings()
    to_encode = data.copy()

    if "sub" in to_encode:
        to_encode["sub"] = str(to_encode["sub"])

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str) -> Optional[TokenData]:
    """
    Verify and decode a JWT token.

    Args:
        token: The JWT token to verify

    Returns:
        TokenData if token is valid, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None

    role = payload.get("role")
    return TokenData(user_id=int(subject), role=role.upper() if isinstance(role, str) else None)
