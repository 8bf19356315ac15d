import pytest

from modules.errors import (
    ERROR_RULES,
    GenerationFailedError,
    SafetyBlockedError,
    VideoGenerationError,
    classify_operation_error,
    error_message_of,
)


def test_person_face_marker_is_safety_blocked():
    err = classify_operation_error({"code": 3, "message": "Blocked: person/face generation restricted"})
    assert isinstance(err, SafetyBlockedError)
    assert err.reason == "Blocked: person/face generation restricted"
    assert str(err).startswith("Animation failed:")


@pytest.mark.parametrize("message", ["internal error", "Quota exceeded", ""])
def test_unmatched_message_is_generation_failed_verbatim(message):
    err = classify_operation_error({"message": message})
    assert type(err) is GenerationFailedError
    assert err.reason == message
    assert str(err) == f"Video generation failed: {message}"


def test_plain_string_error():
    assert isinstance(classify_operation_error("person/face generation"), SafetyBlockedError)


def test_custom_rules_are_checked_in_order():
    class QuotaError(VideoGenerationError):
        def __init__(self, reason):
            super().__init__(f"quota: {reason}")

    rules = [("quota", QuotaError)] + list(ERROR_RULES)
    err = classify_operation_error({"message": "quota hit during person/face generation"}, rules=rules)
    assert isinstance(err, QuotaError)


def test_empty_rules_fall_back():
    err = classify_operation_error({"message": "person/face generation"}, rules=[])
    assert type(err) is GenerationFailedError


def test_error_message_of_handles_shapes():
    assert error_message_of(None) == ""
    assert error_message_of({"code": 1}) == ""
    assert error_message_of("x") == "x"
