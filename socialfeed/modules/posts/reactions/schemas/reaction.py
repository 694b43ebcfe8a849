from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

ReactionStatus = Literal["liked", "unliked"]


class ReactionToggle(BaseModel):
    """Outcome of toggling the caller's reaction on a post"""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    status: ReactionStatus
    reaction_count: int = Field(alias="reactionCount")
