from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from socialfeed.modules.user_management.schemas.user import CommentAuthor


class CommentCreate(BaseModel):
    content: Optional[str] = None


class Comment(BaseModel):
    """Comment returned to client, with a minimal author projection"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    content: str
    created_at: datetime
    user: CommentAuthor
