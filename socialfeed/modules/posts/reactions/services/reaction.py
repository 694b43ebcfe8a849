from typing import Optional
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialfeed.core.errors import NotFound, ServerError, ValidationError
from socialfeed.core.validation import is_valid_id
from socialfeed.modules.posts.models.post import Post
from socialfeed.modules.posts.reactions.models.reaction import Reaction
from socialfeed.modules.posts.reactions.schemas.reaction import ReactionToggle

logger = logging.getLogger("app")


def get_reaction(db: Session, user_id: str, post_id: str) -> Optional[Reaction]:
    """Get reaction by user ID and post ID"""
    return (
        db.query(Reaction)
        .filter(Reaction.user_id == user_id, Reaction.post_id == post_id)
        .first()
    )


def count_reactions(db: Session, post_id: str) -> int:
    return db.query(Reaction).filter(Reaction.post_id == post_id).count()


def _post_exists(db: Session, post_id: str) -> bool:
    return db.query(Post.id).filter(Post.id == post_id).first() is not None


def _remove(db: Session, reaction: Reaction) -> bool:
    """Delete by ID; False when a concurrent toggle already removed the row"""
    deleted = (
        db.query(Reaction)
        .filter(Reaction.id == reaction.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def _insert(db: Session, user_id: str, post_id: str) -> bool:
    """Insert a reaction; False when the (post, user) unique constraint rejects it"""
    db.add(Reaction(id=str(uuid.uuid4()), user_id=user_id, post_id=post_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def toggle_reaction(db: Session, post_id: str, user_id: str, max_attempts: int = 3) -> ReactionToggle:
    """
    Flip the user's reaction on a post between present and absent.

    The read below is only a hint: the unique constraint on (post_id, user_id)
    decides. When a concurrent toggle changes the row between our read and
    our write, the write is rolled back and the toggle starts over from a
    fresh read.
    """
    if not is_valid_id(post_id):
        raise ValidationError("Invalid post ID")
    if not _post_exists(db, post_id):
        raise NotFound("Post not found")

    status = None
    for attempt in range(1, max_attempts + 1):
        existing = get_reaction(db, user_id, post_id)
        if existing:
            if _remove(db, existing):
                status = "unliked"
                break
        elif _insert(db, user_id, post_id):
            status = "liked"
            break
        # A failed insert may come from the post's foreign key rather than the unique constraint
        if not _post_exists(db, post_id):
            raise NotFound("Post not found")
        logger.info(f"Reaction toggle conflict on post {post_id} for user {user_id} (attempt {attempt})")
    else:
        logger.error(f"Reaction toggle on post {post_id} for user {user_id} gave up after {max_attempts} attempts")
        raise ServerError()

    return ReactionToggle(
        message=f"Reaction {status}",
        status=status,
        reaction_count=count_reactions(db, post_id),
    )
