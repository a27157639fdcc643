from gramgpt.entities.message import Turn
from gramgpt.services.TelegramService.texts import (
    EMPTY_HISTORY,
    IMAGE_PLACEHOLDER,
    MODEL_LABEL,
    USER_LABEL,
)

TELEGRAM_MESSAGE_LIMIT = 4096


def render_turn(turn: Turn) -> str:
    """Render one turn as a labelled block; parts keep their submitted order."""
    label = USER_LABEL if turn["role"] == "user" else MODEL_LABEL
    lines: list[str] = []
    for part in turn["parts"]:
        inline_data = part.get("inline_data")
        if inline_data is not None:
            lines.append(IMAGE_PLACEHOLDER.format(mime_type=inline_data["mime_type"]))
        text = part.get("text")
        if text:
            lines.append(text)
    return f"{label}:\n" + "\n".join(lines)


def render_transcript(transcript: tuple[Turn, ...]) -> str:
    if not transcript:
        return EMPTY_HISTORY
    return "\n\n".join(render_turn(turn) for turn in transcript)


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Split text into chunks Telegram accepts, preferring line boundaries."""
    chunks: list[str] = []
    remaining = text
    while len(remaining) > limit:
        cut = remaining.rfind("\n", 0, limit)
        if cut <= 0:
            cut = limit
        chunks.append(remaining[:cut])
        remaining = remaining[cut:].lstrip("\n")
    if remaining:
        chunks.append(remaining)
    return chunks
