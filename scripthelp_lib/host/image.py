"""Pillow helpers standing in for the host's image and draw-context objects."""
from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, UnidentifiedImageError

logger = logging.getLogger(__name__)

PLACEHOLDER_SIZE = (100, 100)
PLACEHOLDER_COLOR = (255, 0, 0)


def is_image(value) -> bool:
    return isinstance(value, Image.Image)


def image_from_bytes(data: bytes) -> Optional[Image.Image]:
    """Decode `data` as an image, or return None when it is not one."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    return img


def image_from_file(path: str | Path) -> Optional[Image.Image]:
    """Load an image from disk, or return None when missing or unreadable."""
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError:
        logger.debug("No readable image at %s", path)
        return None
    return image_from_bytes(data)


def image_to_bytes(image: Image.Image, fmt: str = 'PNG') -> bytes:
    if fmt.upper() in ('JPEG', 'JPG') and image.mode not in ('RGB', 'L'):
        image = image.convert('RGB')
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def placeholder_image(size: Tuple[int, int] = PLACEHOLDER_SIZE, color=PLACEHOLDER_COLOR) -> Image.Image:
    """Solid-colour image used when no real image can be resolved."""
    img = Image.new('RGB', size)
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size[0] - 1, size[1] - 1), fill=color)
    return img


def crop_image(image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    return image.crop((x, y, x + width, y + height))
