import math
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, desc
from sqlalchemy.orm import Session

from socialfeed.core.config import Settings
from socialfeed.core.storage import MediaStorage
from socialfeed.modules.posts.models.post import Post as PostModel
from socialfeed.modules.user_management.models.user import User as UserModel
from socialfeed.modules.posts.comments.models.comment import Comment
from socialfeed.modules.posts.reactions.models.reaction import Reaction
from socialfeed.modules.home_feed.schemas.feed import FeedPost, FeedResponse
from socialfeed.modules.user_management.schemas.user import PostAuthor


def parse_pagination(
    settings: Settings, page: Optional[str], limit: Optional[str]
) -> Tuple[int, int]:
    """Read page/limit query values, falling back to defaults for absent or non-numeric input.

    Unlike page, limit is capped at MAX_PAGE_LIMIT so one request cannot pull the
    whole table; the response reports the capped value.
    """
    page_number = _positive_int(page) or 1
    page_size = _positive_int(limit) or settings.DEFAULT_PAGE_LIMIT
    return page_number, min(page_size, settings.MAX_PAGE_LIMIT)


def _positive_int(value: Optional[str]) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def get_feed(
    db: Session,
    storage: MediaStorage,
    base_url: str,
    page: int = 1,
    limit: int = 10,
    owner_id: Optional[str] = None,
) -> FeedResponse:
    """
    One page of posts, newest first, with counts and author projection.

    The global feed passes no owner_id; "my posts" scopes it to one user.
    """
    query = _build_feed_query(db, owner_id)

    total = query.count()
    offset = (page - 1) * limit
    # Pages past the end never reach the database, whatever their size
    rows = query.offset(offset).limit(limit).all() if offset < total else []

    post_ids = [post.id for post, _ in rows]
    comment_counts = _count_by_post(db, Comment, post_ids)
    reaction_counts = _count_by_post(db, Reaction, post_ids)

    posts = [
        _create_feed_item(storage, base_url, post, author, comment_counts, reaction_counts)
        for post, author in rows
    ]

    return FeedResponse(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
        posts=posts,
    )


def _build_feed_query(db: Session, owner_id: Optional[str]):
    """Posts joined with their author, newest first"""
    query = db.query(PostModel, UserModel).join(UserModel, UserModel.id == PostModel.user_id)
    if owner_id is not None:
        query = query.filter(PostModel.user_id == owner_id)
    # id breaks ties between posts created in the same instant so pages never overlap
    return query.order_by(desc(PostModel.created_at), desc(PostModel.id))


def _count_by_post(db: Session, model, post_ids: List[str]) -> Dict[str, int]:
    """Count rows of a post-scoped table for a whole page of posts in one query"""
    if not post_ids:
        return {}
    rows = (
        db.query(model.post_id, func.count(model.id))
        .filter(model.post_id.in_(post_ids))
        .group_by(model.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}


def _create_feed_item(
    storage: MediaStorage,
    base_url: str,
    post: PostModel,
    author: UserModel,
    comment_counts: Dict[str, int],
    reaction_counts: Dict[str, int],
) -> FeedPost:
    """Transform a post row into a feed item with absolute media URLs"""
    return FeedPost(
        id=post.id,
        title=post.title,
        content=post.content,
        image=storage.public_url(base_url, post.image),
        video=storage.public_url(base_url, post.video),
        created_at=post.created_at,
        updated_at=post.updated_at,
        comment_count=comment_counts.get(post.id, 0),
        reaction_count=reaction_counts.get(post.id, 0),
        user=PostAuthor.model_validate(author),
    )
