"""
Batch driver - animate uploaded images one at a time, publishing a result
snapshot after each item.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence, Tuple

from .config import ImageFile
from .errors import MissingCredentialError
from .utils import get_logger
from .video_generator import generate_video_from_image

logger = get_logger("batch")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


@dataclass(frozen=True)
class BatchResult:
    """Outcome for one uploaded image."""
    file_name: str
    original_image: bytes
    video: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.video is not None and self.error is None


def video_file_name(file_name: str) -> str:
    return f"animation-{file_name}.mp4"


def validate_batch_inputs(api_key: str, images: Sequence[ImageFile], prompt: str) -> Optional[str]:
    """
    Pre-flight checks before a batch starts.

    Returns:
        A user-facing error message, or None when the batch can run
    """
    if not api_key or not api_key.strip():
        return MissingCredentialError().user_message
    if not images:
        return "Please upload at least one image."
    if not prompt or not prompt.strip():
        return "Please enter a prompt to animate the image(s)."
    return None


def iter_batch_results(
    api_key: str,
    images: Sequence[ImageFile],
    prompt: str,
    aspect_ratio: str,
    on_progress: Optional[Callable[[str], None]] = None,
    generate: Callable[..., bytes] = generate_video_from_image,
    **generate_kwargs,
) -> Iterator[Tuple[BatchResult, ...]]:
    """
    Animate images strictly in order.

    Yields the full, immutable result tuple after every image, so callers can
    re-render incrementally. A failure is recorded in that image's slot and
    never stops the remaining images.
    """
    total = len(images)
    results: Tuple[BatchResult, ...] = ()

    for index, image in enumerate(images, start=1):
        def progress(message: str, _index: int = index) -> None:
            if on_progress:
                on_progress(f"({_index}/{total}) {message}")

        try:
            video = generate(
                api_key,
                image.data,
                image.mime_type,
                prompt,
                aspect_ratio,
                progress,
                **generate_kwargs,
            )
            result = BatchResult(
                file_name=image.file_name,
                original_image=image.data,
                video=video,
            )
            logger.info(f"({index}/{total}) {image.file_name}: video ready")
        except Exception as exc:
            message = str(exc) or UNEXPECTED_ERROR_MESSAGE
            logger.warning(f"({index}/{total}) {image.file_name}: {message}")
            result = BatchResult(
                file_name=image.file_name,
                original_image=image.data,
                error=message,
            )

        results = results + (result,)
        yield results


def run_batch(
    api_key: str,
    images: Sequence[ImageFile],
    prompt: str,
    aspect_ratio: str,
    on_progress: Optional[Callable[[str], None]] = None,
    on_update: Optional[Callable[[Tuple[BatchResult, ...]], None]] = None,
    generate: Callable[..., bytes] = generate_video_from_image,
    **generate_kwargs,
) -> Tuple[BatchResult, ...]:
    """Run the whole batch, calling on_update with each new snapshot."""
    results: Tuple[BatchResult, ...] = ()
    for results in iter_batch_results(
        api_key,
        images,
        prompt,
        aspect_ratio,
        on_progress=on_progress,
        generate=generate,
        **generate_kwargs,
    ):
        if on_update:
            on_update(results)
    return results
