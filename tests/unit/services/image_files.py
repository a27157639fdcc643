from gramgpt.services.InputNormalizer.image_file_interface import ImageFileInterface


class BytesImageFile(ImageFileInterface):
    """Image file backed by bytes already in memory."""

    def __init__(
        self, data: bytes, mime_type: str | None, file_name: str | None = None
    ) -> None:
        self._data = data
        self.mime_type = mime_type
        self.file_name = file_name

    async def read(self) -> bytes:
        return self._data
