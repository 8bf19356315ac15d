"""
Error taxonomy for video generation and the rules that classify
server-reported job failures.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Tuple, Union


class VideoGenerationError(Exception):
    """Base class for every failure surfaced by the video generator."""

    def __init__(self, user_message: str):
        super().__init__(user_message)
        self.user_message = user_message


class MissingCredentialError(VideoGenerationError):
    def __init__(self):
        super().__init__("API Key is missing. Please add it in the settings.")


class SubmissionRejectedError(VideoGenerationError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Video generation request was rejected: {detail}")


class GenerationFailedError(VideoGenerationError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Video generation failed: {reason}")


class SafetyBlockedError(VideoGenerationError):
    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(
            "Animation failed: The AI has safety features that restrict generating "
            "videos with real people or faces. Please try an image that does not "
            "contain a human face."
        )


class EmptyResultError(VideoGenerationError):
    def __init__(self):
        super().__init__(
            "Video generation completed, but no video was returned. "
            "This can happen if the content is blocked by safety filters."
        )


class DownloadFailedError(VideoGenerationError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Failed to download video: {status}")


class GenerationTimeoutError(VideoGenerationError):
    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"Video generation timed out after {seconds:g} seconds.")


# ---------- Classification ----------
# Ordered (substring, factory) rules checked against the raw server message.
ErrorRule = Tuple[str, Callable[[str], VideoGenerationError]]

ERROR_RULES: List[ErrorRule] = [
    ("person/face generation", SafetyBlockedError),
]


def error_message_of(error: Union[dict, str, None]) -> str:
    """Extract the diagnostic text from an operation error payload."""
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        return str(error.get("message") or "")
    return str(getattr(error, "message", "") or error)


def classify_operation_error(
    error: Union[dict, str, None],
    rules: Optional[List[ErrorRule]] = None,
) -> VideoGenerationError:
    """
    Map a terminal operation error onto the error taxonomy.

    Args:
        error: The operation's `error` payload ({"code": ..., "message": ...})
        rules: Override for ERROR_RULES

    Returns:
        The first matching rule's error, else GenerationFailedError carrying
        the raw message verbatim.
    """
    message = error_message_of(error)
    for pattern, factory in (ERROR_RULES if rules is None else rules):
        if pattern and pattern in message:
            return factory(message)
    return GenerationFailedError(message)
