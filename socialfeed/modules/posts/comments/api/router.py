from typing import Any, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from socialfeed.deps import get_current_user, get_db
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from socialfeed.modules.posts.comments.services.comment import add_comment, list_comments

router = APIRouter()


@router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_new_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new comment on a post"""
    return add_comment(db, post_id, current_user, comment_in.content)


@router.get("", response_model=List[CommentSchema])
def read_comments_by_post_id(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get comments of a post, earliest first. An empty list means the post has no comments."""
    return list_comments(db, post_id)
