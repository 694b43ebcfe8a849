from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from socialfeed.deps import get_current_user, get_db
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.user_management.schemas.user import UserProfile
from socialfeed.modules.user_management.services.user import get_profile

router = APIRouter()


@router.get("/profile", response_model=UserProfile)
def read_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user with post, reaction and comment counts"""
    return get_profile(db, current_user)
