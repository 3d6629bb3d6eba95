"""
Unit Tests for Schema Validation

Tests for the solution payload validator.
"""

import pytest

from mathtext_toolkit.core.schemas.validator import (
    ValidationError,
    format_validation_error,
    looks_like_solution,
    validate_solution,
)


class TestValidateSolution:
    """Tests for validate_solution function."""

    @pytest.fixture
    def valid_payload(self) -> dict:
        """Create a valid payload for testing."""
        return {
            "problem": "Solve 2x + 5 = 15",
            "steps": [
                {"title": "Subtract 5", "equation": "2x = 10"},
                {"title": "Divide by 2", "equation": "x = 5", "summary": "Done."},
            ],
            "finalAnswer": "x = 5",
        }

    def test_validate_when_valid_data_then_no_error(self, valid_payload):
        """Valid payload should pass basic and strict validation."""
        validate_solution(valid_payload, strict=False)
        validate_solution(valid_payload, strict=True)

    def test_validate_when_not_a_dict_then_raises_error(self):
        """A list is not a payload."""
        with pytest.raises(ValidationError, match="must be an object"):
            validate_solution([1, 2, 3])

    def test_validate_when_missing_steps_then_raises_error(self, valid_payload):
        """Missing required field should raise ValidationError."""
        del valid_payload["steps"]

        with pytest.raises(ValidationError, match="Missing required fields") as exc_info:
            validate_solution(valid_payload)
        assert exc_info.value.errors == ["Missing field: steps"]

    def test_validate_when_empty_steps_then_raises_error(self, valid_payload):
        """An empty step list is rejected at path 'steps'."""
        valid_payload["steps"] = []

        with pytest.raises(ValidationError, match="non-empty list") as exc_info:
            validate_solution(valid_payload)
        assert exc_info.value.path == "steps"

    def test_validate_when_blank_title_then_error_names_step(self, valid_payload):
        """Blank step title points at the offending step."""
        valid_payload["steps"][1]["title"] = "   "

        with pytest.raises(ValidationError) as exc_info:
            validate_solution(valid_payload)
        assert exc_info.value.path == "steps[1].title"

    def test_validate_when_equation_not_string_then_raises_error(self, valid_payload):
        """Optional text fields must be strings when present."""
        valid_payload["steps"][0]["equation"] = 42

        with pytest.raises(ValidationError, match="equation must be a string"):
            validate_solution(valid_payload)

    def test_validate_when_multipart_answer_then_no_error(self, valid_payload):
        """finalAnswer may be an object with parts."""
        valid_payload["finalAnswer"] = {"parts": ["x = 5", "y = 2"]}

        validate_solution(valid_payload, strict=True)

    def test_validate_when_parts_contain_number_then_raises_error(self, valid_payload):
        """Every part must be a string."""
        valid_payload["finalAnswer"] = {"parts": ["x = 5", 2]}

        with pytest.raises(ValidationError, match="bad indexes: \\[1\\]"):
            validate_solution(valid_payload)

    def test_validate_when_strict_and_extra_type_error_then_schema_rejects(self, valid_payload):
        """Strict mode runs the JSON Schema as well."""
        valid_payload["problem"] = ""

        with pytest.raises(ValidationError):
            validate_solution(valid_payload, strict=True)


class TestHelpers:
    """Tests for the non-raising helpers."""

    def test_looks_like_solution_when_valid_then_true(self, sample_payload):
        """A well-formed payload looks like a solution."""
        assert looks_like_solution(sample_payload) is True

    def test_looks_like_solution_when_garbage_then_false(self):
        """Garbage does not, and no exception escapes."""
        assert looks_like_solution({"problem": "x"}) is False
        assert looks_like_solution("not json") is False

    def test_format_validation_error_when_path_then_includes_location(self):
        """User-facing message names the failing field."""
        error = ValidationError("steps must be a non-empty list", path="steps")

        assert format_validation_error(error) == (
            "The solution could not be displayed: steps must be a non-empty list (at steps)."
        )
