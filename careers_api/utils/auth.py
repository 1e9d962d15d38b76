from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from careers_api.config import Settings, get_settings
from careers_api.models.user import User

# auto_error=False so a missing header gets our own 401 message
security = HTTPBearer(auto_error=False)


class TokenUser(BaseModel):
    """Identity carried in a verified access token."""

    user_id: str
    email: str
    first_name: str
    second_name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(user: User, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expires_minutes)
    to_encode = {
        "sub": user.user_id,
        "email": user.email,
        "firstName": user.first_name,
        "secondName": user.second_name,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenUser:
    """Raises ``JWTError`` for bad signatures, expired tokens and missing claims."""
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    try:
        return TokenUser(
            user_id=payload["sub"],
            email=payload["email"],
            first_name=payload["firstName"],
            second_name=payload["secondName"],
            role=payload["role"],
        )
    except KeyError as exc:
        raise JWTError(f"Token is missing claim {exc}")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenUser:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials, settings)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")


async def require_admin(current_user: TokenUser = Depends(get_current_user)) -> TokenUser:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
