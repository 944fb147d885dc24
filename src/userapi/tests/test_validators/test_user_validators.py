import pytest

from userapi.exceptions.base import ErrorKind, ValidationFailedError
from userapi.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from userapi.schemas.user import UserCreate
from userapi.validators.user_validators import check_email, check_name, validate_user_create


def test_valid_payload_passes():
    assert validate_user_create(UserCreate(name="Ada Lovelace", email="ada@example.com")) is None


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_name_is_rejected(name):
    assert check_name(name) == "name must not be empty"


def test_name_length_limit():
    assert check_name("x" * NAME_MAX_LENGTH) is None
    assert check_name("x" * (NAME_MAX_LENGTH + 1)) is not None


@pytest.mark.parametrize("email", ["", "not-an-email", "a@", "@example.com", "a b@example.com"])
def test_bad_email_is_rejected(email):
    assert check_email(email) is not None


def test_email_length_limit():
    local = "a" * 64
    domain = "b" * (EMAIL_MAX_LENGTH - len(local)) + ".com"
    assert check_email(f"{local}@{domain}") is not None


def test_email_surrounding_whitespace_is_rejected():
    assert check_email("  someone@example.com  ") is not None


def test_mixed_case_email_is_accepted():
    assert check_email("Ann@X.com") is None


def test_limits_apply_to_the_stored_value():
    # Surrounding whitespace counts: the name is stored untrimmed.
    assert check_name(" " + "x" * NAME_MAX_LENGTH) is not None
    assert check_email("a@example.com" + " " * EMAIL_MAX_LENGTH) is not None


def test_all_failing_fields_are_reported():
    """
    Behavior:
      - Both name and email are invalid.
      - One ValidationFailedError lists both, in field order.
    """
    with pytest.raises(ValidationFailedError) as exc_info:
        validate_user_create(UserCreate(name=" ", email="nope"))

    error = exc_info.value
    assert error.kind is ErrorKind.VALIDATION_FAILED
    assert [issue.field for issue in error.issues] == ["name", "email"]
    assert error.to_payload()["fields"] == ["name", "email"]
