# app/users/auth_routers.py

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.appconfig import settings
from app.audit.audit_service import record_audit_event
from app.database.connection import get_db
from app.users.auth_dependencies import client_ip, get_current_admin, get_current_user
from app.users.auth_services import (
    registering_user,
    login_user,
    refresh_access_token,
    logout_user,
)
from app.users.user_models.schemas import (
    UserCreate,
    UserRegister,
    UserLogin,
    UserResponse,
    UserLoginResponse,
    UserLogoutResponse,
    UserRefreshResponse,
)
from app.users.user_models.user_model import User

router = APIRouter()


# ============================================================
# ✅ REGISTER
# ============================================================
@router.post("/register", response_model=UserResponse)
async def register_user(user_data: UserRegister, db: AsyncSession = Depends(get_db)):
    return await registering_user(user_data, db)


# ============================================================
# ✅ CREATE USER (ADMIN)
# ============================================================
@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(
    user_data: UserCreate,
    current_admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await registering_user(user_data, db, role=user_data.role)


# ============================================================
# ✅ AUTHENTICATE USER (LOGIN)
# ============================================================
@router.post("/login", response_model=UserLoginResponse)
async def login(
    user_data: UserLogin,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> UserLoginResponse:
    access_token, refresh_token, user = await login_user(user_data, db)
    background_tasks.add_task(
        record_audit_event,
        action="LOGIN",
        resource_type="session",
        resource_id=str(user.id),
        user_id=user.id,
        user_name=user.full_name,
        user_email=user.email,
        location_id=user.location_id or settings.DEFAULT_LOCATION_ID,
        description=f"{user.full_name} logged in",
        ip_address=client_ip(request),
    )
    return UserLoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


# ============================================================
# ✅ REFRESH TOKEN
# ============================================================
@router.post("/refresh", response_model=UserRefreshResponse)
async def refresh_token(
    refresh_token: str = Body(..., embed=True),
    db: AsyncSession = Depends(get_db)
) -> UserRefreshResponse:
    access_token, new_refresh_token = await refresh_access_token(refresh_token, db)
    return UserRefreshResponse(
        access_token=access_token,
        refresh_token=new_refresh_token,
        token_type="bearer"
    )


# ============================================================
# ✅ CURRENT USER
# ============================================================
@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


# ============================================================
# ✅ LOGOUT USER
# ============================================================
@router.post("/logout", response_model=UserLogoutResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> UserLogoutResponse:
    await logout_user(current_user, db)
    return UserLogoutResponse(message="Successfully logged out of all devices")
