from socialfeed.core.validation import (
    is_valid_id, normalize_email, validate_comment_content, validate_login,
    validate_post_fields, validate_registration,
)


def _fields(errors):
    return [e.field for e in errors]


def test_valid_registration_has_no_errors() -> None:
    assert validate_registration("Alice", "alice@x.com", "password123", "password123") == []


def test_registration_reports_every_missing_field() -> None:
    errors = validate_registration(None, None, None, None)
    assert _fields(errors) == ["name", "email", "password", "password_confirmation"]


def test_registration_rules() -> None:
    errors = validate_registration("a" * 256, "not-an-email", "short", "different")
    messages = {e.field: e.message for e in errors}
    assert messages["name"] == "Name cannot exceed 255 characters"
    assert messages["email"] == "Please enter a valid email"
    assert messages["password"] == "Password must be at least 8 characters"
    assert messages["password_confirmation"] == "Passwords do not match"


def test_whitespace_name_counts_as_missing() -> None:
    errors = validate_registration("   ", "alice@x.com", "password123", "password123")
    assert _fields(errors) == ["name"]


def test_profile_picture_must_be_an_image_url() -> None:
    ok = validate_registration("A", "a@x.com", "password123", "password123", "https://cdn.x.com/a.PNG")
    assert ok == []
    bad = validate_registration("A", "a@x.com", "password123", "password123", "ftp://x.com/a.txt")
    assert _fields(bad) == ["profile_picture_url"]


def test_normalize_email() -> None:
    assert normalize_email("  Alice@X.com ") == "alice@x.com"
    assert normalize_email(None) == ""


def test_login_requires_both_fields() -> None:
    assert _fields(validate_login("", None)) == ["email", "password"]
    assert validate_login("a@x.com", "secret") == []


def test_post_and_comment_fields() -> None:
    assert _fields(validate_post_fields(" ", "")) == ["title", "content"]
    assert validate_post_fields("Hello", "World") == []
    assert _fields(validate_comment_content("  \n")) == ["content"]
    assert validate_comment_content("nice") == []


def test_is_valid_id() -> None:
    assert is_valid_id("0b5bd7d6-0f1a-4d59-9c55-5b7a1f5e8f3e")
    assert not is_valid_id("123")
    assert not is_valid_id(None)
