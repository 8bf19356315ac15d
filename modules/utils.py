"""
Utility functions for the Image Animation Studio.
"""

from __future__ import annotations
import io
import logging
import os
import mimetypes
from pathlib import Path
from typing import Optional, Tuple, Union
from PIL import Image, UnidentifiedImageError

from .config import ImageFile

# Veo only accepts these as image-to-video input
PASSTHROUGH_MIME_TYPES = ("image/png", "image/jpeg")

_LOGGER_ROOT = "animation_studio"


def get_logger(name: str) -> logging.Logger:
    """
    Return a namespaced logger, configuring the package root on first use.

    Args:
        name: Short module name, e.g. "video_generator"

    Returns:
        logging.Logger for "animation_studio.<name>"
    """
    root = logging.getLogger(_LOGGER_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        root.addHandler(handler)
        root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    return root.getChild(name)


def _normalize_mime(mime: Optional[str]) -> str:
    mime = mime or ""
    if mime == "image/jpg":
        return "image/jpeg"
    return mime


def load_image_bytes(file) -> Tuple[bytes, str]:
    """
    Read an uploaded image for transport to the video API.

    PNG and JPEG are passed through as-is; any other image type is
    re-encoded to PNG.

    Args:
        file: Streamlit UploadedFile or any binary file object with a `type`

    Returns:
        Tuple of (image_bytes, mime_type)
    """
    data = file.read() if hasattr(file, "read") else bytes(file)
    return encode_image_bytes(data, getattr(file, "type", None))


def encode_image_bytes(data: bytes, mime: Optional[str]) -> Tuple[bytes, str]:
    """Pass PNG/JPEG through, re-encode other images to PNG, reject non-images."""
    mime = _normalize_mime(mime)
    if mime and not mime.startswith("image/"):
        raise ValueError(f"Not an image upload: {mime}")

    if mime in PASSTHROUGH_MIME_TYPES:
        return data, mime

    try:
        image = Image.open(io.BytesIO(data)).convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Could not read image: {exc}") from exc
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue(), "image/png"


def image_file_from_upload(file):
    """Wrap an uploaded file into an ImageFile."""
    data, mime = load_image_bytes(file)
    name = getattr(file, "name", None) or "image"
    return ImageFile(file_name=name, data=data, mime_type=mime)


def image_file_from_path(path: Union[str, Path]) -> ImageFile:
    """
    Load an image from disk the same way uploads are loaded.

    The media type is guessed from the file extension.

    Raises:
        ValueError: the file is not a readable image
    """
    path = Path(path)
    mime, _ = mimetypes.guess_type(path.name)
    data, mime = encode_image_bytes(path.read_bytes(), mime)
    return ImageFile(file_name=path.name, data=data, mime_type=mime)
