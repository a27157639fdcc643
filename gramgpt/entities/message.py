from typing import Literal, NotRequired, TypedDict


class InlineImage(TypedDict):
    """Binary image payload encoded as base64."""

    mime_type: str
    data: str


class Part(TypedDict):
    """Atomic content unit of a turn: either text or an inline image."""

    text: NotRequired[str]
    inline_data: NotRequired[InlineImage]


class Turn(TypedDict):
    """One entry of the transcript, attributed to the user or the model."""

    role: Literal["user", "model"]
    parts: list[Part]


def text_part(text: str) -> Part:
    if not text:
        raise ValueError("Text part requires non-empty text")
    return {"text": text}


def image_part(mime_type: str, data: str) -> Part:
    if not mime_type:
        raise ValueError("Image part requires a mime type")
    if not data:
        raise ValueError("Image part requires base64 data")
    return {"inline_data": {"mime_type": mime_type, "data": data}}


def user_turn(parts: list[Part]) -> Turn:
    if not parts:
        raise ValueError("A turn must contain at least one part")
    return {"role": "user", "parts": list(parts)}


def model_turn(text: str) -> Turn:
    return {"role": "model", "parts": [text_part(text)]}
