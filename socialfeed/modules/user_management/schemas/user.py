from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    name: str
    email: str
    profile_picture_url: Optional[str] = None


class User(UserBase):
    """Public projection of a user; the password hash is never part of it"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime


class UserProfile(User):
    """Current user with activity counts"""
    post_count: int = 0
    reaction_count: int = 0
    comment_count: int = 0


class PostAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    profile_picture_url: Optional[str] = None


class CommentAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    profile_picture_url: Optional[str] = None
