from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from socialfeed.core.validation import normalize_email
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.user_management.schemas.user import UserProfile
from socialfeed.modules.posts.models.post import Post
from socialfeed.modules.posts.comments.models.comment import Comment
from socialfeed.modules.posts.reactions.models.reaction import Reaction


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email, compared case-insensitively"""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_profile(db: Session, user: User) -> UserProfile:
    """Current user plus the posts they own and the reactions/comments those posts received"""
    own_posts = select(Post.id).where(Post.user_id == user.id)

    post_count = db.query(func.count(Post.id)).filter(Post.user_id == user.id).scalar() or 0
    reaction_count = (
        db.query(func.count(Reaction.id)).filter(Reaction.post_id.in_(own_posts)).scalar() or 0
    )
    comment_count = (
        db.query(func.count(Comment.id)).filter(Comment.post_id.in_(own_posts)).scalar() or 0
    )

    return UserProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        profile_picture_url=user.profile_picture_url,
        created_at=user.created_at,
        post_count=post_count,
        reaction_count=reaction_count,
        comment_count=comment_count,
    )
