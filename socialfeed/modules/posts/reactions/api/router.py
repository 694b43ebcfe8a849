from typing import Any

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from socialfeed.core.config import Settings
from socialfeed.deps import get_current_user, get_db, get_settings
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.posts.reactions.schemas.reaction import ReactionToggle
from socialfeed.modules.posts.reactions.services.reaction import toggle_reaction

router = APIRouter()


@router.post("", response_model=ReactionToggle)
def toggle_post_reaction(
    *,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    post_id: str = Path(..., description="The ID of the post to react to"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Like the post, or unlike it if the caller already did"""
    return toggle_reaction(db, post_id, current_user.id, max_attempts=settings.REACTION_TOGGLE_ATTEMPTS)
