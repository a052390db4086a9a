"""Read diff inputs from files or standard input."""

from __future__ import annotations

import codecs
from pathlib import Path
import sys
from typing import BinaryIO

from diffpack.textio.exceptions import TextDecodeError, TextInputError, TextInputNotFoundError

STDIN_MARKER = "-"


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_text(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    normalize: bool = False,
    stdin: BinaryIO | None = None,
) -> str:
    """Read and strictly decode a text input.

    Line endings are kept byte-for-byte unless ``normalize`` is set. A path
    of ``-`` reads standard input.
    """
    try:
        codecs.lookup(encoding)
    except LookupError as error:
        raise TextInputError(f"unknown encoding: {encoding}") from error

    source = str(path)
    if source == STDIN_MARKER:
        stream = stdin if stdin is not None else sys.stdin.buffer
        raw = stream.read()
        label = "<stdin>"
    else:
        input_path = Path(path)
        try:
            raw = input_path.read_bytes()
        except FileNotFoundError as error:
            raise TextInputNotFoundError(f"input not found: {input_path}") from error
        except IsADirectoryError as error:
            raise TextInputError(f"input is a directory: {input_path}") from error
        except OSError as error:
            raise TextInputError(f"unable to read {input_path}: {error}") from error
        label = str(input_path)

    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as error:
        raise TextDecodeError(
            f"{label} is not valid {encoding} (byte offset {error.start})"
        ) from error

    return normalize_newlines(text) if normalize else text
