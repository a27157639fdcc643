from __future__ import annotations

from io import BytesIO
from typing import Any

from telethon.tl.types import MessageMediaDocument, MessageMediaPhoto

from gramgpt.services.InputNormalizer.image_file_interface import ImageFileInterface


class TelegramImageFile(ImageFileInterface):
    """Media of a Telegram message, downloaded only when read."""

    def __init__(
        self, message: Any, mime_type: str | None, file_name: str | None
    ) -> None:
        self.message = message
        self.mime_type = mime_type
        self.file_name = file_name

    @classmethod
    def from_message(cls, message: Any) -> TelegramImageFile | None:
        """
        Return a handle for a photo or document the user attached, or None.

        Link previews (MessageMediaWebPage) carry a photo too but are not
        attachments, so only photo and document media are accepted.
        """
        if not getattr(message, "download_media", None):
            return None

        media = getattr(message, "media", None)

        if isinstance(media, MessageMediaPhoto):
            if media.photo is None:
                return None
            # Telegram recompresses photos to JPEG
            return cls(message=message, mime_type="image/jpeg", file_name=None)

        if not isinstance(media, MessageMediaDocument):
            return None

        document = media.document
        if document is None:
            return None

        mime_type = getattr(document, "mime_type", None)
        file_name: str | None = None
        for attribute in getattr(document, "attributes", None) or []:
            file_name = getattr(attribute, "file_name", file_name)
            if file_name:
                break

        return cls(message=message, mime_type=mime_type, file_name=file_name)

    async def read(self) -> bytes:
        buffer = BytesIO()
        await self.message.download_media(file=buffer)
        return buffer.getvalue()
