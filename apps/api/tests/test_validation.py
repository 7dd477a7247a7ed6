from __future__ import annotations

from app.core.validation import (
    NOT_PROVIDED,
    FieldRule,
    check_choice,
    check_int_range,
    check_text,
    check_url,
    validate_field,
    validate_payload,
)

NAME = FieldRule("name", "text", required=True, nullable=False, max_length=50)
RULES = (
    NAME,
    FieldRule("description", "text"),
    FieldRule("age", "int", min_value=0, max_value=1000),
    FieldRule("is_alive", "bool", nullable=False, default=True),
)


def test_check_text_counts_length_after_trimming():
    assert check_text("  " + "A" * 50 + "  ", label="Name", code="INVALID_NAME", max_length=50) is None

    v = check_text("A" * 51, label="Name", code="INVALID_NAME", max_length=50)
    assert v is not None
    assert v.code == "INVALID_NAME"
    assert v.message == "Name cannot exceed 50 characters"


def test_check_text_whitespace_only_is_empty():
    v = check_text("   ", label="Name", code="INVALID_NAME", required=True)
    assert v is not None and v.message == "Name cannot be empty"
    assert check_text("   ", label="Description", code="INVALID_DESCRIPTION") is None


def test_check_int_range_names_the_bounds():
    assert check_int_range(1000, label="Age", code="INVALID_AGE", min_value=0, max_value=1000) is None
    v = check_int_range(1001, label="Age", code="INVALID_AGE", min_value=0, max_value=1000)
    assert v is not None and v.message == "Age must be between 0 and 1000"
    assert check_int_range("abc", label="Age", code="INVALID_AGE") is not None
    assert check_int_range(True, label="Age", code="INVALID_AGE") is not None


def test_check_choice_lists_allowed_values():
    v = check_choice("sunk", label="Status", code="INVALID_STATUS", choices=("active", "destroyed", "retired"))
    assert v is not None
    assert v.message == "Status must be one of: active, destroyed, retired"


def test_check_url():
    assert check_url("https://example.com/sunny.png", label="Image URL", code="INVALID_IMAGE_URL") is None
    assert check_url("not a url", label="Image URL", code="INVALID_IMAGE_URL") is not None
    assert check_url("ftp://example.com/x", label="Image URL", code="INVALID_IMAGE_URL") is not None


def test_validate_field_tri_state():
    assert validate_field(NAME, NOT_PROVIDED) == (None, NOT_PROVIDED)

    violation, _ = validate_field(NAME, None)
    assert violation is not None and violation.message == "Name cannot be null"

    description = FieldRule("description", "text")
    assert validate_field(description, None) == (None, None)
    # empty optional text is stored as cleared
    assert validate_field(description, "   ") == (None, None)
    assert validate_field(description, "  Straw Hat  ") == (None, "Straw Hat")


def test_validate_payload_create_requires_and_defaults():
    cleaned, violation = validate_payload(RULES, {"description": "x"}, partial=False)
    assert violation is not None
    assert violation.code == "INVALID_NAME"
    assert violation.message == "Name is required"

    cleaned, violation = validate_payload(RULES, {"name": "  Luffy "}, partial=False)
    assert violation is None
    assert cleaned == {"name": "Luffy", "is_alive": True}


def test_validate_payload_partial_only_touches_supplied_fields():
    cleaned, violation = validate_payload(RULES, {"description": None}, partial=True)
    assert violation is None
    assert cleaned == {"description": None}

    cleaned, violation = validate_payload(RULES, {"age": -1}, partial=True)
    assert violation is not None and violation.code == "INVALID_AGE"


def test_not_provided_is_a_falsy_singleton():
    assert not NOT_PROVIDED
    assert repr(NOT_PROVIDED) == "NOT_PROVIDED"
    assert type(NOT_PROVIDED)() is NOT_PROVIDED
