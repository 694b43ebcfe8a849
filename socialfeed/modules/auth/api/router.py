"""Authentication router: registration, login and logout"""
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from socialfeed.core.config import Settings
from socialfeed.deps import get_current_user, get_db, get_settings
from socialfeed.modules.auth.schemas.auth import (
    LoginRequest, LoginResponse, MessageResponse, RegisterRequest, RegisterResponse
)
from socialfeed.modules.auth.services.auth import login_user, register_user
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.user_management.schemas.user import User as UserSchema

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    register_in: RegisterRequest,
) -> Any:
    """Create an account and return it with an access token"""
    user, token = register_user(
        db,
        settings,
        name=register_in.name,
        email=register_in.email,
        password=register_in.password,
        password_confirmation=register_in.password_confirmation,
        profile_picture_url=register_in.profile_picture_url,
    )
    return RegisterResponse(user=UserSchema.model_validate(user), token=token)


@router.post("/login", response_model=LoginResponse)
def login(
    *,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    login_in: LoginRequest,
) -> Any:
    """Exchange email and password for an access token"""
    user, token = login_user(db, settings, email=login_in.email, password=login_in.password)
    return LoginResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)) -> Any:
    """
    Tokens are stateless, so logging out only means the client drops its
    token. Nothing is revoked server-side.
    """
    return {"message": "Successfully logged out"}
