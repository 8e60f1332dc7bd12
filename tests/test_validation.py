import pytest

from contact_api.app.core.errors import ValidationError
from contact_api.app.core.validation import format_errors, validate
from contact_api.app.schemas.contact import ContactCreate, ContactSearch
from contact_api.app.schemas.user import UpdateUserRequest


def _fields(exc_info):
    return {error["field"] for error in exc_info.value.errors}


def test_contact_with_only_first_name():
    contact = validate(ContactCreate, {"first_name": "Eko"})

    assert contact.first_name == "Eko"
    assert contact.last_name is None
    assert contact.email is None
    assert contact.phone is None


@pytest.mark.parametrize("email", ["eko@gmail.com", "eko.khannedy+tag@mail.example.co.id"])
def test_accepts_valid_emails(email):
    assert validate(ContactCreate, {"first_name": "Eko", "email": email}).email == email


@pytest.mark.parametrize("email", ["", "eko", "eko@", "@gmail.com", "eko@gmail", "eko @gmail.com"])
def test_rejects_invalid_emails(email):
    with pytest.raises(ValidationError) as exc_info:
        validate(ContactCreate, {"first_name": "Eko", "email": email})

    assert _fields(exc_info) == {"email"}


def test_collects_all_violations():
    with pytest.raises(ValidationError) as exc_info:
        validate(ContactCreate, {"last_name": "x" * 101, "phone": "1" * 21})

    assert _fields(exc_info) == {"first_name", "last_name", "phone"}
    assert exc_info.value.status_code == 400


def test_rejects_non_string_first_name():
    with pytest.raises(ValidationError) as exc_info:
        validate(ContactCreate, {"first_name": 123})

    assert _fields(exc_info) == {"first_name"}


def test_rejects_non_mapping_payload():
    with pytest.raises(ValidationError) as exc_info:
        validate(ContactCreate, None)

    assert exc_info.value.errors == [{"field": "body", "message": "Request body must be a JSON object"}]


def test_update_user_fields_are_optional():
    request = validate(UpdateUserRequest, {})

    assert request.name is None
    assert request.password is None


def test_search_defaults_and_coercion():
    search = validate(ContactSearch, {"page": "2"})

    assert search.page == 2
    assert search.size == 10


def test_format_errors_strips_request_part():
    errors = [
        {"loc": ("body", "first_name"), "msg": "Field required"},
        {"loc": ("path", "contact_id"), "msg": "Input should be a valid integer"},
        {"loc": ("body",), "msg": "Input should be a valid dictionary"},
    ]

    assert format_errors(errors) == [
        {"field": "first_name", "message": "Field required"},
        {"field": "contact_id", "message": "Input should be a valid integer"},
        {"field": "body", "message": "Input should be a valid dictionary"},
    ]
