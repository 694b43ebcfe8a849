from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from socialfeed.core.storage import MediaStorage
from socialfeed.deps import get_current_user, get_db, get_storage
from socialfeed.modules.auth.schemas.auth import MessageResponse
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.posts.schemas.post import (
    Post as PostSchema, PostCreate, PostUpdate, PostUpdateResponse
)
from socialfeed.modules.posts.services.post import create_post, delete_post, edit_post

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/posts", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Create new post with optional image and video files.
    """
    post_in = PostCreate(title=title or "", content=content or "")
    return create_post(db, storage, post_in, current_user, image=image, video=video)


@router.put("/posts/{post_id}", response_model=PostUpdateResponse)
def update_post_by_id(
    *,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
    post_id: str,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Update a post. Only the owner may edit it.
    """
    post_in = PostUpdate(title=title, content=content)
    post = edit_post(db, storage, post_id, current_user, post_in, image=image, video=video)
    return PostUpdateResponse(message="Post updated successfully", post=PostSchema.model_validate(post))


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Delete a post and all associated data. This removes:
    1. All comments and reactions on this post
    2. The post itself
    3. Its image and video files, best effort
    """
    delete_post(db, storage, post_id, current_user)
    return {"message": "Post deleted successfully"}
