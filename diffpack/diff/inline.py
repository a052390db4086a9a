"""Character-level diff for a single line pair."""

from __future__ import annotations

from typing import Iterable

from diffpack.core.lcs import longest_common_subsequence
from diffpack.diff.models import InlineChange


def diff_characters(old_line: str, new_line: str) -> list[InlineChange]:
    """Unmerged equal/insert/delete spans over the characters of two lines.

    Each gap before an LCS anchor becomes at most one delete span and one
    insert span; every anchor character is its own equal span.
    """
    anchors = longest_common_subsequence(old_line, new_line)

    changes: list[InlineChange] = []
    old_index = 0
    new_index = 0

    for anchor_old, anchor_new in anchors:
        if old_index < anchor_old:
            changes.append(InlineChange(kind="delete", text=old_line[old_index:anchor_old]))
            old_index = anchor_old
        if new_index < anchor_new:
            changes.append(InlineChange(kind="insert", text=new_line[new_index:anchor_new]))
            new_index = anchor_new

        changes.append(InlineChange(kind="equal", text=old_line[old_index]))
        old_index += 1
        new_index += 1

    if old_index < len(old_line):
        changes.append(InlineChange(kind="delete", text=old_line[old_index:]))
    if new_index < len(new_line):
        changes.append(InlineChange(kind="insert", text=new_line[new_index:]))

    return changes


def merge_consecutive_changes(changes: Iterable[InlineChange]) -> list[InlineChange]:
    """Collapse neighbouring spans of the same kind, keeping order."""
    merged: list[InlineChange] = []
    for change in changes:
        if merged and merged[-1].kind == change.kind:
            merged[-1] = InlineChange(kind=change.kind, text=merged[-1].text + change.text)
        else:
            merged.append(change)
    return merged


def compute_inline_changes(old_line: str, new_line: str) -> list[InlineChange]:
    """Merged character-level spans turning ``old_line`` into ``new_line``."""
    return merge_consecutive_changes(diff_characters(old_line, new_line))


def left_side_text(changes: Iterable[InlineChange]) -> str:
    return "".join(change.text for change in changes if change.kind in ("equal", "delete"))


def right_side_text(changes: Iterable[InlineChange]) -> str:
    return "".join(change.text for change in changes if change.kind in ("equal", "insert"))
