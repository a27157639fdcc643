from abc import ABC, abstractmethod


class ImageFileInterface(ABC):
    """A single user-selected file, read lazily when the message is built."""

    mime_type: str | None
    file_name: str | None

    @abstractmethod
    async def read(self) -> bytes:
        """Return the full byte content of the file."""
