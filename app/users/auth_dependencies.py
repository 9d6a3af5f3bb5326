# app/users/auth_dependencies.py
# Centralized Authentication Dependencies

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, Query, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from config.appconfig import settings
from app.database.connection import get_db
from app.users.user_models.user_model import User
from app.users.auth_token_model.token_model import Token
from app.users.security import decode_token

security_scheme = HTTPBearer(auto_error=False)


@dataclass
class RequestContext:
    """Who is calling, from which location and address."""
    user: User
    location_id: str
    ip_address: str = "Unknown"

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer, else 'Unknown'."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "Unknown"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user with token revocation check.

    Validates:
    1. JWT signature and expiry
    2. Token exists in database and is not revoked
    3. User exists and is active

    Raises 401 if any validation fails.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Provide token in Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token_string = credentials.credentials

    payload = decode_token(token_string)
    if not payload or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired access token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_email = payload.get("sub")
    if not user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing user identifier",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_record = await db.execute(
        select(Token).where(
            and_(
                Token.token_string == token_string,
                Token.token_type == "access"
            )
        )
    )
    token_obj = token_record.scalars().first()
    if not token_obj or token_obj.is_revoked:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has been revoked. Please log in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(select(User).where(User.email == user_email))
    user = result.scalars().first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return user


async def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Require admin role.
    Raises 403 if user is not admin.
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return current_user


def _resolve_location(user: User, header_location: Optional[str], query_location: Optional[str]) -> str:
    return header_location or query_location or user.location_id or settings.DEFAULT_LOCATION_ID


async def get_request_context(
    request: Request,
    current_user: User = Depends(get_current_user),
    x_location_id: Optional[str] = Header(None, alias="x-location-id"),
    location_id: Optional[str] = Query(None, alias="locationId"),
) -> RequestContext:
    return RequestContext(
        user=current_user,
        location_id=_resolve_location(current_user, x_location_id, location_id),
        ip_address=client_ip(request),
    )


async def get_admin_context(
    request: Request,
    current_admin: User = Depends(get_current_admin),
    x_location_id: Optional[str] = Header(None, alias="x-location-id"),
    location_id: Optional[str] = Query(None, alias="locationId"),
) -> RequestContext:
    return RequestContext(
        user=current_admin,
        location_id=_resolve_location(current_admin, x_location_id, location_id),
        ip_address=client_ip(request),
    )
