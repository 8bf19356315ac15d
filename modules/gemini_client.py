"""
Gemini API client initialization and configuration.
"""

from __future__ import annotations
import os
from typing import Optional

from google import genai
from google.genai import types as genai_types

from .config import DEFAULT_PERSON_GENERATION, DEFAULT_VIDEO_MODEL


def get_api_key() -> str:
    """
    Resolve the Gemini API key from the environment.

    Returns:
        The key, or an empty string if none is configured
    """
    # Prefer official GEMINI_API_KEY; fallback to GOOGLE_GENAI_API_KEY for compatibility.
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_GENAI_API_KEY") or ""


def get_genai_client(api_key: Optional[str] = None) -> Optional["genai.Client"]:
    """
    Initialize and return Gemini API client.

    Args:
        api_key: Explicit key; falls back to the environment when omitted

    Returns:
        genai.Client instance or None if no API key is available
    """
    api_key = api_key or get_api_key()
    if not api_key:
        return None
    return genai.Client(api_key=api_key)


def get_video_model_name() -> str:
    """
    Get Veo model name from environment or return default.

    Returns:
        Model name string
    """
    return os.getenv("VEO_MODEL", DEFAULT_VIDEO_MODEL)


def get_person_generation() -> str:
    """Person generation policy sent with every request (env VEO_PERSON_GENERATION)."""
    return os.getenv("VEO_PERSON_GENERATION", DEFAULT_PERSON_GENERATION)


def build_video_config(aspect_ratio: str, number_of_videos: int = 1) -> genai_types.GenerateVideosConfig:
    """
    Build the Veo request config.

    Veo has no per-category safety thresholds; its only moderation knob is
    person generation, which is set to the most permissive value the
    image-to-video endpoint accepts.
    """
    return genai_types.GenerateVideosConfig(
        number_of_videos=number_of_videos,
        aspect_ratio=aspect_ratio,
        person_generation=get_person_generation(),
    )
