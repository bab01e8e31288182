"""
Payload validation – pure functions, no I/O.

Each validator returns an ordered list of human-readable messages; an
empty list means the payload is acceptable.  They run before any store
access so a rejected request never touches the database.
"""
from email_validator import EmailNotValidError, validate_email

from ..models.user import UserCreate, UserUpdate

NAME_MIN = 2
NAME_MAX = 100
EMAIL_MAX = 200
AGE_MIN, AGE_MAX = 0, 150


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    """Syntax-only check (no DNS lookups)."""
    if email is None or not email.strip():
        return False
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _age_in_range(age: int) -> bool:
    return AGE_MIN <= age <= AGE_MAX


def validate_user_create(payload: UserCreate) -> list[str]:
    errors: list[str] = []

    name = (payload.name or "").strip()
    if len(name) < NAME_MIN:
        errors.append(f"Name must be at least {NAME_MIN} characters.")
    elif len(name) > NAME_MAX:
        errors.append(f"Name must be at most {NAME_MAX} characters.")

    if not is_valid_email(payload.email):
        errors.append("A valid email is required.")
    elif len(payload.email.strip()) > EMAIL_MAX:
        errors.append(f"Email must be at most {EMAIL_MAX} characters.")

    if payload.age is None or not _age_in_range(payload.age):
        errors.append(f"Age must be between {AGE_MIN} and {AGE_MAX}.")

    return errors


def validate_user_update(payload: UserUpdate) -> list[str]:
    errors: list[str] = []

    # a blank name counts as "not supplied" and is left alone
    if payload.name is not None:
        name = payload.name.strip()
        if 0 < len(name) < NAME_MIN:
            errors.append(f"Name must be at least {NAME_MIN} characters.")
        elif len(name) > NAME_MAX:
            errors.append(f"Name must be at most {NAME_MAX} characters.")

    if payload.email is not None:
        if not is_valid_email(payload.email):
            errors.append("If supplied, email must be valid.")
        elif len(payload.email.strip()) > EMAIL_MAX:
            errors.append(f"Email must be at most {EMAIL_MAX} characters.")

    if payload.age is not None and not _age_in_range(payload.age):
        errors.append(f"If supplied, age must be between {AGE_MIN} and {AGE_MAX}.")

    return errors
