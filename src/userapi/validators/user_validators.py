"""
Structural validation of inbound user payloads.

Pure functions: no I/O, no repository access. The controller calls
`validate_user_create` before the service, so invalid payloads never reach the store.
"""
from email_validator import EmailNotValidError, validate_email

from userapi.exceptions.base import FieldIssue, ValidationFailedError
from userapi.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from userapi.schemas.user import UserCreate


def check_name(name: str) -> str | None:
    """Return the reason `name` is invalid, or None."""
    if not name or not name.strip():
        return "name must not be empty"
    # Length of the value as stored, untrimmed.
    if len(name) > NAME_MAX_LENGTH:
        return f"name must be at most {NAME_MAX_LENGTH} characters"
    return None


def check_email(email: str) -> str | None:
    """Return the reason `email` is not a valid address, or None."""
    if not email or not email.strip():
        return "email must not be empty"
    if len(email) > EMAIL_MAX_LENGTH:
        return f"email must be at most {EMAIL_MAX_LENGTH} characters"
    if email != email.strip():
        return "email must not have surrounding whitespace"
    try:
        # Shape only: no DNS lookups.
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return "email must be a valid email address"
    return None


def validate_user_create(payload: UserCreate) -> None:
    """
    Raise ValidationFailedError listing every failing field; return None otherwise.
    """
    issues = []
    if reason := check_name(payload.name):
        issues.append(FieldIssue("name", reason))
    if reason := check_email(payload.email):
        issues.append(FieldIssue("email", reason))
    if issues:
        raise ValidationFailedError(issues)
