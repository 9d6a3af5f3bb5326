# app/users/security.py

from sqlalchemy.ext.asyncio import AsyncSession
from passlib.context import CryptContext
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from config.appconfig import settings
from app.helpers.time import utcnow
from app.users.auth_token_model.token_model import Token
from jose import JWTError, jwt
import secrets


# Password hashing context
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

REFRESH_TOKEN_EXPIRY_DAYS = 7


# ============================================================
# ✅ Verify Password
# ============================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================
# ✅ Get Password Hash
# ============================================================
def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


async def _issue_token(
    data: Dict[str, Any],
    db: AsyncSession,
    token_type: str,
    expire: datetime,
) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type, "jti": secrets.token_hex(16)})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    # Store as active token so logout can revoke it
    db.add(Token(
        token_string=encoded_jwt,
        token_type=token_type,
        user_id=data.get("user_id"),
        expires_at=expire,
    ))
    await db.commit()
    return encoded_jwt


# ============================================================
# ✅ Create Access Token
# ============================================================
async def create_access_token(
    data: Dict[str, Any],
    db: AsyncSession,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token and store it as active."""
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRY))
    return await _issue_token(data, db, "access", expire)


# ============================================================
# ✅ Create Refresh Token
# ============================================================
async def create_refresh_token(
    data: Dict[str, Any],
    db: AsyncSession,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT refresh token and store it as active."""
    expire = utcnow() + (expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRY_DAYS))
    return await _issue_token(data, db, "refresh", expire)


# ============================================================
# ✅ Decode Token
# ============================================================
def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a JWT token."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
