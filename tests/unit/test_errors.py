from ark.core.errors import (
    BadRequestError,
    NotFoundError,
    RepositoryError,
    UnauthorizedError,
    ValidationError,
    _field_error,
    _field_message,
    _field_name,
)


def test_error_codes_and_statuses():
    assert (NotFoundError.status_code, NotFoundError.code) == (404, "NOT_FOUND")
    assert (BadRequestError.status_code, BadRequestError.code) == (400, "BAD_REQUEST")
    assert (ValidationError.status_code, ValidationError.code) == (400, "VALIDATION_ERROR")
    assert (UnauthorizedError.status_code, UnauthorizedError.code) == (401, "UNAUTHORIZED")
    assert (RepositoryError.status_code, RepositoryError.code) == (500, "INTERNAL_ERROR")


def test_to_dict_omits_empty_field_errors():
    assert NotFoundError("asset not found").to_dict() == {
        "success": False, "error": "asset not found", "code": "NOT_FOUND",
    }


def test_to_dict_includes_field_errors():
    err = ValidationError("Validation failed", field_errors=[{"field": "name", "error": "is required"}])
    assert err.to_dict()["field_errors"] == [{"field": "name", "error": "is required"}]


def test_field_name_strips_location_and_formats_indexes():
    assert _field_name(("body", "name")) == "name"
    assert _field_name(("body", "tags", 3)) == "tags[3]"
    assert _field_name(("query", "limit")) == "limit"
    assert _field_name(("body",)) == "body"


def test_field_messages():
    assert _field_message({"type": "missing"}) == "is required"
    assert _field_message({"type": "string_too_short", "ctx": {"min_length": 2}}) == (
        "must be at least 2 characters"
    )
    assert _field_message({"type": "string_too_long", "ctx": {"max_length": 100}}) == (
        "must not exceed 100 characters"
    )
    assert _field_message({"type": "greater_than_equal", "ctx": {"ge": 0}}) == "must be at least 0"
    assert _field_message({"type": "uuid_parsing"}) == "must be a valid UUID"
    assert _field_message({"type": "something_else", "msg": "bad"}) == "bad"


def test_invalid_json_body_is_reported_on_body():
    err = {"type": "json_invalid", "loc": ("body", 12), "msg": "JSON decode error", "ctx": {}}
    assert _field_error(err) == {"field": "body", "error": "must be valid JSON"}
