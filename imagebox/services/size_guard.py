from typing import Optional

from ..errors import LengthRequired, MalformedRequest, RequestTooLarge


def check_content_length(header: Optional[str], limit: int) -> int:
    """Validate a declared ``Content-Length`` against ``limit`` before the body is read.

    Returns the declared length.
    """
    if header is None:
        raise LengthRequired()
    try:
        length = int(header.strip())
    except ValueError:
        raise MalformedRequest(f"Invalid Content-Length: {header!r}")
    if length < 0:
        raise MalformedRequest(f"Invalid Content-Length: {header!r}")
    if length > limit:
        raise RequestTooLarge(f"Request body of {length} bytes exceeds the {limit} byte limit")
    return length
