import uuid


def allocate_identity() -> str:
    """Fresh random (v4) UUID used as the base file name of an asset."""
    return str(uuid.uuid4())
