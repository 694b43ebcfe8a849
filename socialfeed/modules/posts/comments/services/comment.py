from typing import List
import logging
import uuid

from sqlalchemy.orm import Session

from socialfeed.core.errors import NotFound, ValidationError
from socialfeed.core.validation import validate_comment_content
from socialfeed.modules.posts.comments.models.comment import Comment
from socialfeed.modules.posts.comments.schemas.comment import Comment as CommentSchema
from socialfeed.modules.posts.services.post import get_post
from socialfeed.modules.user_management.models.user import User as UserModel
from socialfeed.modules.user_management.schemas.user import CommentAuthor

logger = logging.getLogger("app")


def _to_schema(comment: Comment, author: UserModel) -> CommentSchema:
    return CommentSchema(
        id=comment.id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=comment.created_at,
        user=CommentAuthor.model_validate(author),
    )


def _require_post(db: Session, post_id: str) -> None:
    if not get_post(db, post_id):
        raise NotFound("Post not found")


def add_comment(db: Session, post_id: str, author: UserModel, content: str) -> CommentSchema:
    """Create a new comment on an existing post"""
    errors = validate_comment_content(content)
    if errors:
        raise ValidationError(errors=errors)
    _require_post(db, post_id)

    comment = Comment(
        id=str(uuid.uuid4()),
        post_id=post_id,
        user_id=author.id,
        content=content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"User {author.id} commented on post {post_id}")
    return _to_schema(comment, author)


def list_comments(db: Session, post_id: str) -> List[CommentSchema]:
    """
    Comments of a post, earliest first.

    An unknown post raises NotFound; a post without comments returns an empty
    list, so the two outcomes never look alike to the caller.
    """
    _require_post(db, post_id)

    rows = (
        db.query(Comment, UserModel)
        .join(UserModel, UserModel.id == Comment.user_id)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return [_to_schema(comment, author) for comment, author in rows]
