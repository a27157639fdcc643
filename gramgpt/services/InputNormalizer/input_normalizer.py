from __future__ import annotations

import base64
import logging

from gramgpt.entities.errors import (
    FileReadError,
    ImageTooLargeError,
    UnsupportedImageError,
)
from gramgpt.entities.message import Part, image_part, text_part
from gramgpt.services.InputNormalizer.image_file_interface import ImageFileInterface


DEFAULT_MAX_IMAGE_BYTES: int = 5 * 1024 * 1024


class InputNormalizer:
    """Turns raw composer input into the ordered parts of a user turn."""

    def __init__(
        self,
        logger: logging.Logger,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.logger = logger
        self.max_image_bytes = max_image_bytes

    async def normalize(
        self, text: str, file: ImageFileInterface | None = None
    ) -> list[Part]:
        """
        Build the parts for a user message.

        The image part, when a file is given, always precedes the text part.
        Any problem with the file raises FileReadError before a part is built.

        Args:
            text: Raw text typed by the user, trimmed here
            file: Optional attached image

        Returns:
            Ordered parts, image first
        """
        parts: list[Part] = []

        if file is not None:
            parts.append(await self._file_to_part(file))

        stripped = (text or "").strip()
        if stripped:
            parts.append(text_part(stripped))

        return parts

    async def _file_to_part(self, file: ImageFileInterface) -> Part:
        mime_type = file.mime_type
        if not mime_type or not mime_type.startswith("image/"):
            raise UnsupportedImageError(mime_type)

        try:
            data = await file.read()
        except Exception as exc:
            raise FileReadError(
                f"Could not read attachment {file.file_name or 'unnamed'}"
            ) from exc

        size_bytes = len(data)
        if size_bytes == 0:
            raise FileReadError("Empty attachment")

        if size_bytes > self.max_image_bytes:
            raise ImageTooLargeError(size_bytes, self.max_image_bytes)

        encoded = base64.b64encode(data).decode("ascii")
        self.logger.info(
            "Collected image attachment: %s (%s bytes)",
            file.file_name or "unnamed",
            size_bytes,
        )
        return image_part(mime_type, encoded)
