import logging
import uuid
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialfeed.core.config import Settings
from socialfeed.core.errors import Conflict, InvalidCredentials, ValidationError
from socialfeed.core.security import create_access_token, get_password_hash, verify_password
from socialfeed.core.validation import normalize_email, validate_login, validate_registration
from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.user_management.services.user import get_user_by_email

logger = logging.getLogger("app")

# bcrypt hash of a random string; verified against when the email is unknown so
# both failure paths cost one hash comparison
_DUMMY_HASH = get_password_hash(uuid.uuid4().hex)


def register_user(
    db: Session,
    settings: Settings,
    *,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    password_confirmation: Optional[str],
    profile_picture_url: Optional[str] = None,
) -> Tuple[User, str]:
    """Create an account and return it together with a fresh access token"""
    errors = validate_registration(name, email, password, password_confirmation, profile_picture_url)
    if errors:
        raise ValidationError(errors=errors)

    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise Conflict("User already exists")

    user = User(
        id=str(uuid.uuid4()),
        name=name.strip(),
        email=email,
        hashed_password=get_password_hash(password),
        profile_picture_url=(profile_picture_url or "").strip() or None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration with the same email won the unique index
        db.rollback()
        logger.info(f"Duplicate registration rejected by unique index for {email}")
        raise Conflict("User already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user, create_access_token(settings, user.id)


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def login_user(
    db: Session, settings: Settings, *, email: Optional[str], password: Optional[str]
) -> Tuple[User, str]:
    errors = validate_login(email, password)
    if errors:
        raise ValidationError(errors=errors)

    user = authenticate(db, email, password)
    if not user:
        # Same error whether the email or the password was wrong
        raise InvalidCredentials()

    return user, create_access_token(settings, user.id)
