from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from socialfeed.core import security
from socialfeed.core.config import Settings
from socialfeed.core.errors import Unauthorized
from socialfeed.core.storage import MediaStorage
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.user_management.services.user import get_user

# auto_error is off so a missing header is reported through Unauthorized like every other token failure
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)


def get_settings(request: Request) -> Settings:
    """
    Dependency for the settings object the application was built with
    """
    return request.app.state.settings


def get_db(request: Request) -> Generator:
    """
    Dependency for getting DB session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_storage(request: Request) -> MediaStorage:
    return request.app.state.storage


def get_current_user(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token: Optional[str] = Depends(oauth2_scheme),
) -> User:
    """
    Dependency for getting current authenticated user
    """
    if not token:
        raise Unauthorized("Not authorized, no token")

    user_id = security.verify_access_token(settings, token)
    if not user_id:
        raise Unauthorized("Not authorized, token failed")

    user = get_user(db, user_id=user_id)
    if not user:
        raise Unauthorized("Not authorized, user not found")

    return user
