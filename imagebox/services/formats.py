from dataclasses import dataclass
from typing import Dict, Optional

from ..errors import UnsupportedFormat


@dataclass(frozen=True)
class ImageFormat:
    mime: str
    codec: str  # Pillow format name
    extension: str


PNG = ImageFormat(mime="image/png", codec="PNG", extension="png")
JPEG = ImageFormat(mime="image/jpeg", codec="JPEG", extension="jpeg")

SUPPORTED_FORMATS: Dict[str, ImageFormat] = {fmt.mime: fmt for fmt in (PNG, JPEG)}


def resolve_format(content_type: Optional[str]) -> ImageFormat:
    """Map a declared content type to the image format it names.

    Only ``image/png`` and ``image/jpeg`` are accepted; media type parameters
    such as ``charset`` are ignored.
    """
    if not content_type:
        raise UnsupportedFormat("Missing content type")
    mime = content_type.split(";", 1)[0].strip().lower()
    fmt = SUPPORTED_FORMATS.get(mime)
    if fmt is None:
        raise UnsupportedFormat(f"Unsupported content type: {mime}")
    return fmt
