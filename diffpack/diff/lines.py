"""Line-level edit script reconstruction."""

from __future__ import annotations

from diffpack.core.lcs import longest_common_subsequence
from diffpack.diff.models import DiffLine

LINE_SEPARATOR = "\n"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; an empty text is one empty line."""
    return text.split(LINE_SEPARATOR)


def diff_lines(old_text: str, new_text: str) -> list[DiffLine]:
    """Build an equal/insert/delete edit script for two texts.

    Gaps before each LCS anchor are emitted deletes first, then inserts.
    Line numbers are 1-based running counters per side.
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    anchors = longest_common_subsequence(old_lines, new_lines)

    result: list[DiffLine] = []
    old_index = 0
    new_index = 0

    for anchor_old, anchor_new in anchors:
        while old_index < anchor_old:
            result.append(DiffLine.delete(old_index + 1, old_lines[old_index]))
            old_index += 1
        while new_index < anchor_new:
            result.append(DiffLine.insert(new_index + 1, new_lines[new_index]))
            new_index += 1

        result.append(
            DiffLine.equal(
                old_index + 1,
                new_index + 1,
                old_lines[old_index],
                new_lines[new_index],
            )
        )
        old_index += 1
        new_index += 1

    while old_index < len(old_lines):
        result.append(DiffLine.delete(old_index + 1, old_lines[old_index]))
        old_index += 1
    while new_index < len(new_lines):
        result.append(DiffLine.insert(new_index + 1, new_lines[new_index]))
        new_index += 1

    return result
