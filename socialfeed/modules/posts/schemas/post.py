from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class PostCreate(BaseModel):
    title: str
    content: str


class PostUpdate(BaseModel):
    """Partial update; a field only changes when given a non-empty, different value"""
    title: Optional[str] = None
    content: Optional[str] = None


class Post(BaseModel):
    """Post as stored: media fields hold filenames, not URLs"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str
    image: Optional[str] = None
    video: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PostUpdateResponse(BaseModel):
    message: str
    post: Post
