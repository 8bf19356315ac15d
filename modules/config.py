"""
Configuration, constants, and data models for the Image Animation Studio.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------- Data Models ----------
@dataclass(frozen=True)
class ImageFile:
    """One uploaded image, ready for transport."""
    file_name: str
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class GenerationRequest:
    """Input for a single image-to-video job."""
    image_bytes: bytes
    mime_type: str
    prompt: str
    aspect_ratio: str


# ---------- Veo Settings ----------
DEFAULT_VIDEO_MODEL = "veo-2.0-generate-001"

# Most permissive value Veo accepts for image-to-video
DEFAULT_PERSON_GENERATION = "allow_adult"

ASPECT_RATIOS = ("16:9", "9:16", "1:1", "4:3", "3:4")
DEFAULT_ASPECT_RATIO = "16:9"

NUMBER_OF_VIDEOS = 1

# Seconds
PROGRESS_INTERVAL_SECONDS = 4.0
POLL_INTERVAL_SECONDS = _env_float("VEO_POLL_INTERVAL_SECONDS", 10.0)
# 0 disables the deadline
DEFAULT_MAX_WAIT_SECONDS = _env_float("VEO_MAX_WAIT_SECONDS", 900.0)
DOWNLOAD_TIMEOUT_SECONDS = _env_float("VEO_DOWNLOAD_TIMEOUT_SECONDS", 120.0)


# ---------- Progress Text ----------
LOADING_MESSAGES = (
    "Warming up the animation engine...",
    "Sketching the first frame...",
    "Consulting the motion muses...",
    "Adding a touch of magic...",
    "Stitching pixels into motion...",
    "Rendering the final scene...",
    "Almost there, polishing the details...",
)

GENERATION_STARTED_MESSAGE = "Video generation started. This can take several minutes."
FINALIZING_MESSAGE = "Finalizing video..."


# ---------- UI Copy ----------
PROMPT_PLACEHOLDER = (
    "e.g., A cinematic shot of the car driving through a neon-lit city at night, "
    "rain on the ground reflecting the lights."
)
