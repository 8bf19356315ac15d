"""
Veo Video Generator - Submit an image-to-video job, poll it to completion
and download the rendered clip.
"""

from __future__ import annotations

import json
import threading
import time
from typing import Callable, Optional

import requests
from google.genai import types as genai_types

from .config import (
    DEFAULT_MAX_WAIT_SECONDS,
    DOWNLOAD_TIMEOUT_SECONDS,
    FINALIZING_MESSAGE,
    GENERATION_STARTED_MESSAGE,
    LOADING_MESSAGES,
    NUMBER_OF_VIDEOS,
    POLL_INTERVAL_SECONDS,
    PROGRESS_INTERVAL_SECONDS,
    GenerationRequest,
)
from .errors import (
    DownloadFailedError,
    EmptyResultError,
    GenerationFailedError,
    GenerationTimeoutError,
    MissingCredentialError,
    SubmissionRejectedError,
    VideoGenerationError,
    classify_operation_error,
)
from .gemini_client import build_video_config, get_genai_client, get_video_model_name
from .progress import ProgressTicker
from .utils import get_logger

logger = get_logger("video_generator")


def generate_video_from_image(
    api_key: str,
    image_bytes: bytes,
    mime_type: str,
    prompt: str,
    aspect_ratio: str,
    on_progress: Callable[[str], None],
    *,
    client=None,
    model_name: Optional[str] = None,
    poll_interval: float = POLL_INTERVAL_SECONDS,
    max_wait: Optional[float] = DEFAULT_MAX_WAIT_SECONDS,
    progress_interval: float = PROGRESS_INTERVAL_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    attach_thread: Optional[Callable[[threading.Thread], None]] = None,
) -> bytes:
    """
    Animate one image with Veo and return the MP4 bytes.

    Args:
        api_key: Gemini API key; required
        image_bytes: Raw PNG/JPEG bytes
        mime_type: Media type of image_bytes
        prompt: Free-text description of the motion
        aspect_ratio: One of config.ASPECT_RATIOS (others are left to the API)
        on_progress: Receives human-readable status text
        client: Pre-built genai.Client (built from api_key when omitted)
        max_wait: Wall-clock limit on polling in seconds; 0/None waits forever
        sleep: Poll sleep function
        clock: Monotonic clock the deadline is measured with
        attach_thread: Hook that receives the ticker thread before it starts

    Raises:
        VideoGenerationError subclass describing the failure
    """
    try:
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        request = GenerationRequest(
            image_bytes=image_bytes,
            mime_type=mime_type,
            prompt=prompt,
            aspect_ratio=aspect_ratio,
        )

        with ProgressTicker(
            on_progress,
            LOADING_MESSAGES,
            interval=progress_interval,
            attach_thread=attach_thread,
        ):
            on_progress(LOADING_MESSAGES[0])
            if client is None:
                client = get_genai_client(api_key)
            operation = _submit(client, request, model_name or get_video_model_name())
            on_progress(GENERATION_STARTED_MESSAGE)
            operation = _poll_until_done(client, operation, poll_interval, max_wait, sleep, clock)

        on_progress(FINALIZING_MESSAGE)

        if operation.error:
            logger.error(
                "Veo operation error: "
                + json.dumps(operation.error, indent=2, default=str)
            )
            raise classify_operation_error(operation.error)

        video_uri = _extract_video_uri(operation)
        if not video_uri:
            logger.error(f"Veo did not return a video link. Full response: {operation.response}")
            raise EmptyResultError()

        return _download_video(video_uri, api_key)

    except VideoGenerationError as exc:
        logger.error(f"Video generation error: {exc}")
        raise
    except Exception as exc:
        logger.exception("Unexpected video generation failure")
        raise GenerationFailedError(str(exc) or type(exc).__name__) from exc


def _submit(client, request: GenerationRequest, model_name: str):
    """Start the long-running Veo job and return its operation handle."""
    logger.info(f"Submitting Veo job (model={model_name}, aspect_ratio={request.aspect_ratio})")
    try:
        return client.models.generate_videos(
            model=model_name,
            source=genai_types.GenerateVideosSource(
                prompt=request.prompt,
                image=genai_types.Image(
                    image_bytes=request.image_bytes,
                    mime_type=request.mime_type,
                ),
            ),
            config=build_video_config(request.aspect_ratio, NUMBER_OF_VIDEOS),
        )
    except Exception as exc:
        logger.error(f"Veo rejected the generation request: {exc}")
        raise SubmissionRejectedError(str(exc)) from exc


def _poll_until_done(client, operation, poll_interval: float, max_wait: Optional[float], sleep, clock):
    """Re-fetch the operation every poll_interval seconds until it is done."""
    started = clock()
    while not operation.done:
        elapsed = clock() - started
        if max_wait and elapsed >= max_wait:
            logger.error(f"Veo operation {getattr(operation, 'name', '?')} still running after {elapsed:.0f}s")
            raise GenerationTimeoutError(max_wait)
        sleep(poll_interval)
        try:
            operation = client.operations.get(operation)
        except Exception as exc:
            logger.error(f"Polling Veo operation failed: {exc}")
            raise GenerationFailedError(str(exc)) from exc
    logger.info(f"Veo operation finished after {clock() - started:.0f}s of polling")
    return operation


def _extract_video_uri(operation) -> Optional[str]:
    response = operation.response
    if response is None:
        return None
    videos = getattr(response, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video is not None else None


def _download_video(video_uri: str, api_key: str) -> bytes:
    """Fetch the generated clip; the file endpoint expects the key as a query parameter."""
    try:
        resp = requests.get(
            video_uri,
            params={"key": api_key},
            timeout=DOWNLOAD_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as exc:
        logger.error(f"Video download error: {exc}")
        raise DownloadFailedError(str(exc)) from exc

    if not resp.ok:
        logger.error(f"Video download returned HTTP {resp.status_code}")
        raise DownloadFailedError(resp.reason or str(resp.status_code))

    logger.info(f"Video downloaded ({len(resp.content)} bytes)")
    return resp.content
