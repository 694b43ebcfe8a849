from typing import Any, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from socialfeed.core.config import Settings
from socialfeed.core.storage import MediaStorage
from socialfeed.deps import get_current_user, get_db, get_settings, get_storage
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.home_feed.schemas.feed import FeedResponse
from socialfeed.modules.home_feed.services.feed import get_feed, parse_pagination

router = APIRouter()


def _base_url(request: Request, settings: Settings) -> str:
    return settings.PUBLIC_BASE_URL or str(request.base_url)


# page and limit are read as strings so that non-numeric values fall back to the defaults
@router.get("/posts", response_model=FeedResponse)
def read_posts(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: MediaStorage = Depends(get_storage),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> Any:
    """Public feed of all posts, newest first"""
    page_number, page_size = parse_pagination(settings, page, limit)
    return get_feed(db, storage, _base_url(request, settings), page_number, page_size)


@router.get("/my-posts", response_model=FeedResponse)
def read_my_posts(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: MediaStorage = Depends(get_storage),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
) -> Any:
    """The caller's own posts, same shape as the public feed"""
    page_number, page_size = parse_pagination(settings, page, limit)
    return get_feed(
        db, storage, _base_url(request, settings), page_number, page_size, owner_id=current_user.id
    )
