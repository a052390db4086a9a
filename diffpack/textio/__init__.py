"""Input helpers that turn files and streams into diffable text."""

from diffpack.textio.exceptions import TextDecodeError, TextInputError, TextInputNotFoundError
from diffpack.textio.reader import STDIN_MARKER, normalize_newlines, read_text

__all__ = [
    "STDIN_MARKER",
    "TextInputError",
    "TextInputNotFoundError",
    "TextDecodeError",
    "normalize_newlines",
    "read_text",
]
