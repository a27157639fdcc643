class GramGPTError(Exception):
    """Base error for every failure the session can surface."""


class InitializationError(GramGPTError):
    """Raised when the provider session cannot be created."""


class FileReadError(GramGPTError):
    """Raised when an attached file cannot be turned into an image part."""


class ImageTooLargeError(FileReadError):
    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Attachment exceeds size limit: {size_bytes} > {limit_bytes} bytes"
        )


class UnsupportedImageError(FileReadError):
    def __init__(self, mime_type: str | None) -> None:
        self.mime_type = mime_type
        super().__init__(f"Unsupported mime type: {mime_type}")


class ProviderError(GramGPTError):
    """Raised for any failure of the external model call."""
