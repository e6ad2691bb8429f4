"""
Preview thumbnails.
Decodes an uploaded payload with the codec its content type declared, scales it
to a fixed width keeping the aspect ratio and encodes it back in the same codec.
"""
import io
from dataclasses import dataclass
from typing import Tuple

import structlog
from PIL import Image

from ..errors import DecodeFailure
from .formats import ImageFormat

logger = structlog.get_logger(__name__)

PREVIEW_WIDTH = 240


@dataclass(frozen=True)
class Preview:
    data: bytes
    width: int
    height: int


def preview_size(width: int, height: int, target_width: int = PREVIEW_WIDTH) -> Tuple[int, int]:
    """Target (width, height) for a ``width`` x ``height`` source."""
    if width <= 0 or height <= 0:
        raise DecodeFailure(f"Image has no pixels ({width}x{height})")
    target_height = round(target_width / width * height)
    return target_width, max(1, target_height)


def decode_image(data: bytes, fmt: ImageFormat) -> Image.Image:
    """Fully decode ``data`` as ``fmt``; the payload is never sniffed for another format."""
    try:
        im = Image.open(io.BytesIO(data), formats=[fmt.codec])
        im.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"Cannot decode payload as {fmt.mime}: {e}")
    if im.width == 0 or im.height == 0:
        im.close()
        raise DecodeFailure(f"Image has no pixels ({im.width}x{im.height})")
    return im


def render_preview(data: bytes, fmt: ImageFormat, target_width: int = PREVIEW_WIDTH) -> Preview:
    im = decode_image(data, fmt)
    try:
        size = preview_size(im.width, im.height, target_width)
        # Lanczos on 8-bit RGBA
        thumb = im.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
    except (OSError, ValueError) as e:
        raise DecodeFailure(f"Cannot resize {fmt.mime} image: {e}")
    finally:
        im.close()

    if fmt.codec == "JPEG":
        # JPEG has no alpha channel
        thumb = thumb.convert("RGB")

    out = io.BytesIO()
    try:
        thumb.save(out, format=fmt.codec)
    except (OSError, ValueError) as e:
        raise DecodeFailure(f"Cannot encode preview as {fmt.mime}: {e}")
    logger.debug("Preview rendered", codec=fmt.codec, width=thumb.width, height=thumb.height)
    return Preview(data=out.getvalue(), width=thumb.width, height=thumb.height)
