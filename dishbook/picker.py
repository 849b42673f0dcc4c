"""Photo picking: turn user-selected image files into inline JPEG payloads."""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image, UnidentifiedImageError

from dishbook.config import PHOTO_JPEG_QUALITY, PHOTO_MAX_SIDE_PX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerConfig:
    """Picker options. Only still images are accepted, one at a time."""

    media_filter: str = "images"
    selection_limit: int = 1
    jpeg_quality: int = PHOTO_JPEG_QUALITY
    max_side_px: int = PHOTO_MAX_SIDE_PX


def load_photo(path: str | Path, config: PickerConfig | None = None) -> bytes | None:
    """Decode an image file and re-encode it as JPEG, or return None if it is not a usable image."""
    config = PickerConfig() if config is None else config
    if config.media_filter != "images":
        raise ValueError(f"Unsupported media filter: {config.media_filter}")

    photo_path = Path(path).expanduser()
    if not photo_path.is_file():
        logger.info("picker_skip path=%s reason=not_a_file", photo_path)
        return None

    try:
        with Image.open(photo_path) as img:
            img.load()
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        logger.info("picker_skip path=%s reason=decode_failed error=%r", photo_path, exc)
        return None

    if max(rgb.size) > config.max_side_px:
        rgb.thumbnail((config.max_side_px, config.max_side_px))

    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=config.jpeg_quality)
    payload = out.getvalue()
    logger.debug("picker_loaded path=%s size=%dx%d bytes=%d", photo_path, rgb.width, rgb.height, len(payload))
    return payload


async def pick_photo(paths: Sequence[str | Path], config: PickerConfig | None = None) -> bytes | None:
    """Resolve once with the first usable image among the allowed selection, or None."""
    config = PickerConfig() if config is None else config
    for path in list(paths)[: max(0, config.selection_limit)]:
        payload = await asyncio.to_thread(load_photo, path, config)
        if payload is not None:
            return payload
    return None


def describe_photo(payload: bytes | None) -> str:
    """Short human summary of a photo payload."""
    if not payload:
        return "no photo"

    size_kb = len(payload) / 1024
    try:
        with Image.open(io.BytesIO(payload)) as img:
            return f"{img.format or 'image'} {img.width}x{img.height}, {size_kb:.1f} KB"
    except (UnidentifiedImageError, OSError):
        return f"unreadable photo, {size_kb:.1f} KB"
