import logging

from fastapi import HTTPException, status
from sqlalchemy import update
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from config.appconfig import settings
from app.users.user_models.schemas import UserLogin, UserRegister
from app.users.user_models.user_model import User
from app.users.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.users.auth_token_model.token_model import Token

logger = logging.getLogger(__name__)


def _token_claims(user: User) -> dict:
    return {"sub": user.email, "user_id": user.id, "role": user.role}


# ============================================================
# ✅ REGISTER A NEW USER
# ============================================================
def _self_registration_role(email: str) -> str:
    bootstrap = (settings.BOOTSTRAP_ADMIN_EMAIL or "").strip().lower()
    return "admin" if bootstrap and email == bootstrap else "clinician"


async def registering_user(
    user_data: UserRegister, db: AsyncSession, role: Optional[str] = None
) -> User:
    """
    Public registration always yields a clinician, except for the configured
    bootstrap admin address. ``role`` is only passed for admin-created accounts.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    new_user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        credentials=user_data.credentials,
        license_number=user_data.license_number,
        npi=user_data.npi,
        location_id=user_data.location_id,
        role=role or _self_registration_role(user_data.email),
    )

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)
    logger.info(f"Registered {new_user.role} {new_user.email}")
    return new_user


# ============================================================
# ✅ AUTHENTICATE USER
# ============================================================
async def authenticate_user(
    email: str, password: str, db: AsyncSession
) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()

    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# ============================================================
# ✅ LOGIN USER
# ============================================================
async def login_user(user_data: UserLogin, db: AsyncSession) -> tuple[str, str, User]:
    user = await authenticate_user(user_data.email, user_data.password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    access_token = await create_access_token(data=_token_claims(user), db=db)
    refresh_token = await create_refresh_token(data=_token_claims(user), db=db)
    return access_token, refresh_token, user


# ============================================================
# ✅ REFRESH ACCESS TOKEN
# ============================================================
async def refresh_access_token(refresh_token: str, db: AsyncSession) -> tuple[str, str]:
    payload = decode_token(refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(select(Token).where(Token.token_string == refresh_token))
    stored_token = result.scalars().first()
    if not stored_token or stored_token.is_revoked:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token revoked or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(select(User).where(User.email == payload.get("sub")))
    user = result.scalars().first()
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User inactive or not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    stored_token.is_revoked = True
    await db.commit()

    access_token = await create_access_token(data=_token_claims(user), db=db)
    new_refresh_token = await create_refresh_token(data=_token_claims(user), db=db)
    return access_token, new_refresh_token


# ============================================================
# ✅ LOGOUT USER (Global Revocation)
# ============================================================
async def logout_user(user: User, db: AsyncSession) -> None:
    await db.execute(
        update(Token)
        .where(Token.user_id == user.id)
        .values(is_revoked=True)
    )
    await db.commit()
    logger.info(f"Revoked all tokens for {user.email}")
