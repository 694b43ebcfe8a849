"""
Explicit input validators.

Each validator returns a list of FieldError; an empty list means the input is
acceptable. Routers raise ValidationError(errors=...) when the list is not
empty, so every endpoint reports problems in the same shape.
"""

import re
import uuid
from dataclasses import dataclass
from typing import List, Optional

EMAIL_REGEX = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,})+$")
PROFILE_PICTURE_REGEX = re.compile(
    r"^(https?://.*\.(?:png|jpg|jpeg|gif|webp|svg|bmp|tiff?))$", re.IGNORECASE
)

NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def normalize_email(email: Optional[str]) -> str:
    """Trim and lowercase an email address."""
    return (email or "").strip().lower()


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_id(value: Optional[str]) -> bool:
    """Entity ids are UUID strings."""
    if not value:
        return False
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    password_confirmation: Optional[str],
    profile_picture_url: Optional[str] = None,
) -> List[FieldError]:
    errors: List[FieldError] = []

    name = (name or "").strip()
    if not name:
        errors.append(FieldError("name", "Name is required"))
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(FieldError("name", f"Name cannot exceed {NAME_MAX_LENGTH} characters"))

    email = (email or "").strip()
    if not email:
        errors.append(FieldError("email", "Email is required"))
    elif not EMAIL_REGEX.match(email):
        errors.append(FieldError("email", "Please enter a valid email"))

    if not password:
        errors.append(FieldError("password", "Password is required"))
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError("password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters"))

    if not password_confirmation:
        errors.append(FieldError("password_confirmation", "Password confirmation is required"))
    elif password != password_confirmation:
        errors.append(FieldError("password_confirmation", "Passwords do not match"))

    picture = (profile_picture_url or "").strip()
    if picture and not PROFILE_PICTURE_REGEX.match(picture):
        errors.append(
            FieldError("profile_picture_url", "Please provide a valid image URL (http/https).")
        )

    return errors


def validate_login(email: Optional[str], password: Optional[str]) -> List[FieldError]:
    errors: List[FieldError] = []
    if is_blank(email):
        errors.append(FieldError("email", "Email is required"))
    if not password:
        errors.append(FieldError("password", "Password is required"))
    return errors


def validate_post_fields(title: Optional[str], content: Optional[str]) -> List[FieldError]:
    errors: List[FieldError] = []
    if is_blank(title):
        errors.append(FieldError("title", "Title is required"))
    if is_blank(content):
        errors.append(FieldError("content", "Content is required"))
    return errors


def validate_comment_content(content: Optional[str]) -> List[FieldError]:
    if is_blank(content):
        return [FieldError("content", "Comment content is required")]
    return []
