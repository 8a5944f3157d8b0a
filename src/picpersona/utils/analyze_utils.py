import io
import logging
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .. import config
from ..errors import ImageDecodeError, ImageTooLargeError, UnsupportedImageTypeError
from ..features import extract_image_features
from ..models import ImageFeatures

logger = logging.getLogger(__name__)


def check_upload(content_type: Optional[str], size: int, max_bytes: Optional[int] = None) -> None:
    """Reject uploads with a disallowed type or an oversized body."""
    max_bytes = max_bytes or config.MAX_UPLOAD_BYTES
    if content_type not in config.ALLOWED_CONTENT_TYPES:
        raise UnsupportedImageTypeError(content_type)
    if size > max_bytes:
        raise ImageTooLargeError(size, max_bytes, "bytes")


"""
Decodes uploaded bytes into a PIL image without scanning any pixels first.

Process:
    1. Open lazily (header only) with only the allowed decoders, so a TIFF,
       BMP or EPS body is refused whatever content type was declared.
    2. Check the pixel count against the cap.
    3. Force the decode so truncated/corrupt files fail here, not later.
    4. Apply the EXIF orientation, as browsers do when drawing the image.

Raises:
    UnsupportedImageTypeError: no allowed decoder recognizes the bytes.
    ImageTooLargeError: more pixels than max_pixels.
    ImageDecodeError: a recognized image that is truncated or corrupt.
"""
def load_image(data: bytes, max_pixels: Optional[int] = None) -> Image.Image:
    max_pixels = max_pixels or config.MAX_IMAGE_PIXELS
    try:
        img = Image.open(io.BytesIO(data), formats=config.ALLOWED_IMAGE_FORMATS)
    except Image.DecompressionBombError as exc:
        raise ImageTooLargeError(None, max_pixels, "pixels") from exc
    except UnidentifiedImageError as exc:
        raise UnsupportedImageTypeError(None) from exc
    except (OSError, ValueError) as exc:
        raise ImageDecodeError() from exc

    w, h = img.size
    if w * h > max_pixels:
        raise ImageTooLargeError(w * h, max_pixels, "pixels")
    if w == 0 or h == 0:
        raise ImageDecodeError("image has no pixels")

    try:
        img.load()
        img = ImageOps.exif_transpose(img)
    except (OSError, SyntaxError, ValueError) as exc:
        raise ImageDecodeError() from exc
    return img


"""
Fits an image onto a square white canvas, preserving aspect ratio.

The image is scaled by min(size / w, size / h) and centered; transparent
pixels end up white. Every detection threshold assumes this canvas.
"""
def normalize_to_canvas(img: Image.Image, size: int = config.CANVAS_SIZE) -> Image.Image:
    w, h = img.size
    scale = min(size / w, size / h)
    scaled_w = max(1, round(w * scale))
    scaled_h = max(1, round(h * scale))

    rgba = img.convert("RGBA").resize((scaled_w, scaled_h), Image.Resampling.BILINEAR)

    canvas = Image.new("RGB", (size, size), (255, 255, 255))
    offset = ((size - scaled_w) // 2, (size - scaled_h) // 2)
    canvas.paste(rgba, offset, mask=rgba)
    return canvas


def analyze_image(data: bytes) -> ImageFeatures:
    """Decode, normalize and extract features from an encoded upload."""
    img = load_image(data)
    source_size = img.size
    canvas = normalize_to_canvas(img)
    pixels = np.asarray(canvas, dtype=np.uint8)

    features = extract_image_features(pixels, file_size=len(data), source_size=source_size)
    logger.info(
        "analyzed %dx%d image (%d bytes): face=%s confidence=%.2f quality=%s",
        source_size[0], source_size[1], len(data),
        features.face_detected, features.face_confidence, features.image_quality,
    )
    return features
