"""
Error kinds raised by the upload pipeline and the storage client.

Each error carries a generic message that is safe to show to the caller and
the HTTP status used when it reaches the API boundary. Details (paths, SDK
messages) stay in the exception args and in the logs.
"""


class UploadError(Exception):
    """Base exception for all upload-related errors."""

    status_code: int = 500
    user_message: str = "Failed to process upload"


class MissingInputError(UploadError):
    """Raised when no file (or an empty file) was supplied."""

    status_code = 400
    user_message = "No file uploaded"


class UploadTooLargeError(UploadError):
    """Raised when the uploaded file exceeds the configured size limit."""

    status_code = 413
    user_message = "File too large"


class ProcessingFailedError(UploadError):
    """Raised when the transcoder could not be run or exited with an error."""

    status_code = 422
    user_message = "Failed to process video"


class StorageUnconfiguredError(UploadError):
    """Raised when required storage settings are absent."""

    status_code = 503
    user_message = "Storage is not configured"


class StorageOperationError(UploadError):
    """Raised when the storage backend rejects a request or cannot be reached."""

    status_code = 502
    user_message = "Storage operation failed"


class InvalidRequestError(UploadError):
    """Raised when request parameters fail validation."""

    status_code = 422
    user_message = "Invalid request"
