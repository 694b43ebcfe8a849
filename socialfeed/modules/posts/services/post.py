from typing import Optional, Tuple
import logging
import uuid

from sqlalchemy.orm import Session

from socialfeed.core.errors import NotFound, Unauthorized, ValidationError
from socialfeed.core.storage import MediaStorage, Upload, UploadTooLarge, has_upload
from socialfeed.core.validation import FieldError, is_blank, is_valid_id, validate_post_fields
from socialfeed.modules.posts.models.post import Post
from socialfeed.modules.posts.schemas.post import PostCreate, PostUpdate
from socialfeed.modules.posts.comments.models.comment import Comment
from socialfeed.modules.posts.reactions.models.reaction import Reaction
from socialfeed.modules.user_management.models.user import User

logger = logging.getLogger(__name__)


def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID; malformed IDs simply match nothing"""
    if not is_valid_id(post_id):
        return None
    return db.query(Post).filter(Post.id == post_id).first()


def get_owned_post(db: Session, post_id: str, owner: User, action: str) -> Post:
    """Load a post the caller owns. Existence is checked before ownership (404 before 401)."""
    post = get_post(db, post_id)
    if not post:
        raise NotFound("Post not found")
    if post.user_id != owner.id:
        logger.warning(f"User {owner.id} tried to {action} post {post.id} owned by {post.user_id}")
        raise Unauthorized(f"Not authorized to {action} this post")
    return post


def _check_media(
    storage: MediaStorage, image: Optional[Upload], video: Optional[Upload]
) -> None:
    errors = storage.check_upload(image, "image") + storage.check_upload(video, "video")
    if errors:
        raise ValidationError(errors=errors)


def _save_media(storage: MediaStorage, upload: Optional[Upload], kind: str) -> Optional[str]:
    if not has_upload(upload):
        return None
    try:
        return storage.save(upload)
    except UploadTooLarge:
        raise ValidationError(
            errors=[FieldError(kind, f"File too large. Maximum size is {storage.max_size} bytes")]
        )


def _store_uploads(
    storage: MediaStorage, image: Optional[Upload], video: Optional[Upload]
) -> Tuple[Optional[str], Optional[str]]:
    image_name = _save_media(storage, image, "image")
    try:
        video_name = _save_media(storage, video, "video")
    except Exception:
        storage.delete(image_name)
        raise
    return image_name, video_name


def create_post(
    db: Session,
    storage: MediaStorage,
    post_in: PostCreate,
    owner: User,
    image: Optional[Upload] = None,
    video: Optional[Upload] = None,
) -> Post:
    """Create new post, storing any uploaded media first"""
    errors = validate_post_fields(post_in.title, post_in.content)
    if errors:
        raise ValidationError(errors=errors)
    _check_media(storage, image, video)

    image_name, video_name = _store_uploads(storage, image, video)

    post = Post(
        id=str(uuid.uuid4()),
        user_id=owner.id,
        title=post_in.title,
        content=post_in.content,
        image=image_name,
        video=video_name,
    )
    db.add(post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        # The row never existed, so its files would be unreachable
        storage.delete(image_name)
        storage.delete(video_name)
        raise
    db.refresh(post)

    logger.info(f"Created post {post.id} for user {owner.id}")
    return post


def edit_post(
    db: Session,
    storage: MediaStorage,
    post_id: str,
    owner: User,
    post_in: PostUpdate,
    image: Optional[Upload] = None,
    video: Optional[Upload] = None,
) -> Post:
    """
    Partially update a post.

    Title and content only change when a non-empty value different from the
    current one is supplied. An uploaded image or video always replaces the
    stored reference; the file it replaces is left on disk.
    """
    post = get_owned_post(db, post_id, owner, "edit")
    _check_media(storage, image, video)

    if not is_blank(post_in.title) and post_in.title != post.title:
        post.title = post_in.title
    if not is_blank(post_in.content) and post_in.content != post.content:
        post.content = post_in.content

    image_name, video_name = _store_uploads(storage, image, video)
    if image_name:
        post.image = image_name
    if video_name:
        post.video = video_name

    try:
        db.commit()
    except Exception:
        db.rollback()
        storage.delete(image_name)
        storage.delete(video_name)
        raise
    db.refresh(post)

    logger.info(f"Updated post {post.id}")
    return post


def delete_post(db: Session, storage: MediaStorage, post_id: str, owner: User) -> None:
    """
    Delete post and all associated comments and reactions.

    Child rows and the post go in one transaction. Media files are removed
    afterwards on a best-effort basis: a failure is logged and the post stays
    deleted, which can leave orphaned files behind.
    """
    post = get_owned_post(db, post_id, owner, "delete")
    image, video = post.image, post.video

    try:
        comments = db.query(Comment).filter(Comment.post_id == post.id).delete(synchronize_session=False)
        reactions = db.query(Reaction).filter(Reaction.post_id == post.id).delete(synchronize_session=False)
        db.delete(post)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Failed to delete post {post_id}; no rows were removed")
        raise
    logger.info(f"Deleted post {post_id} with {comments} comments and {reactions} reactions")

    for filename in (image, video):
        storage.delete(filename)
