from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from socialfeed.modules.user_management.schemas.user import PostAuthor


class FeedPost(BaseModel):
    """Post as listed in a feed: absolute media URLs, derived counts and its author"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    image: Optional[str] = None
    video: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    comment_count: int = Field(alias="commentCount")
    reaction_count: int = Field(alias="reactionCount")
    user: PostAuthor


class FeedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")
    posts: List[FeedPost]
