"""Failures raised by the upload pipeline.

Each error carries the HTTP status the upload route answers with. None of
them is fatal to the serving process.
"""


class ImageboxError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        self.detail = detail or self.detail


class MalformedRequest(ImageboxError):
    status_code = 400
    detail = "Malformed request"


class LengthRequired(ImageboxError):
    status_code = 411
    detail = "Content-Length header is required"


class RequestTooLarge(ImageboxError):
    status_code = 413
    detail = "Request body is too large"


class UnsupportedFormat(ImageboxError):
    status_code = 415
    detail = "Unsupported media type"


class DecodeFailure(ImageboxError):
    status_code = 500
    detail = "Image could not be decoded"


class StorageFailure(ImageboxError):
    status_code = 500
    detail = "Image could not be stored"
