"""
Cosmic Garden - Input Sanitization
"""
import re
from typing import Any, Optional

from .errors import FlowerInputError

MAX_MESSAGE_LENGTH = 200
MAX_AUTHOR_LENGTH = 50

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")


def strip_control_chars(text: str) -> str:
    return _CONTROL_CHARS.sub("", text)


def sanitize_message(message: Any) -> str:
    """Validate and clean a mood message, raising FlowerInputError on bad input"""
    if not message or not isinstance(message, str):
        raise FlowerInputError("Message must be a non-empty string", "message_required")

    if len(message) > MAX_MESSAGE_LENGTH:
        raise FlowerInputError(f"Message must be {MAX_MESSAGE_LENGTH} characters or less", "message_too_long")

    cleaned = strip_control_chars(message.strip()).strip()
    if not cleaned:
        raise FlowerInputError("Message cannot be empty", "message_empty")
    return cleaned


def resolve_author(author: Any, anonymous: str = "Anonymous") -> str:
    """Bounded, control-free display name; anything unusable becomes `anonymous`"""
    if not author or not isinstance(author, str):
        return anonymous
    cleaned = strip_control_chars(author.strip()[:MAX_AUTHOR_LENGTH]).strip()
    return cleaned or anonymous


def optional_text(value: Any, limit: int) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = strip_control_chars(value.strip())[:limit]
    return cleaned or None
