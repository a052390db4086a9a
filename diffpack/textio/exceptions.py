"""Text input exceptions."""


class TextInputError(Exception):
    """Base class for text input errors."""


class TextInputNotFoundError(TextInputError):
    """Input path does not exist."""


class TextDecodeError(TextInputError):
    """Input bytes could not be decoded with the requested encoding."""
