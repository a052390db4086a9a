"""Text diff pipeline: line diff, change merging and inline highlighting."""

from __future__ import annotations

from pathlib import Path
import time
from typing import Iterable

from diffpack.diff.inline import compute_inline_changes
from diffpack.diff.lines import diff_lines, split_lines
from diffpack.diff.merge import merge_adjacent_changes
from diffpack.diff.models import DiffLine, DiffStats, TextDiffResult
from diffpack.plugins import DiffEndEvent, DiffStartEvent, get_active_plugin_manager
from diffpack.textio import read_text

__all__ = [
    "compute_inline_changes",
    "compute_line_diff",
    "compute_stats",
    "diff_files",
    "diff_texts",
]


def compute_line_diff(old_text: str, new_text: str) -> list[DiffLine]:
    """Diff two texts line by line.

    Delete runs directly followed by insert runs are paired into modified
    lines carrying character-level spans. The result is a fresh list owned
    by the caller; the same inputs always give the same output.
    """
    return merge_adjacent_changes(diff_lines(old_text, new_text))


def compute_stats(lines: Iterable[DiffLine]) -> DiffStats:
    return DiffStats.from_lines(lines)


def diff_texts(
    old_text: str,
    new_text: str,
    *,
    left_label: str = "left",
    right_label: str = "right",
    swap: bool = False,
) -> TextDiffResult:
    """Diff two texts and report the run to active lifecycle plugins.

    With ``swap`` the inputs and their labels trade places before diffing.
    """
    if swap:
        old_text, new_text = new_text, old_text
        left_label, right_label = right_label, left_label

    plugin_manager = get_active_plugin_manager()
    plugin_manager.on_diff_start(
        DiffStartEvent(
            left_label=left_label,
            right_label=right_label,
            left_length=len(old_text),
            right_length=len(new_text),
            swapped=swap,
        )
    )

    started = time.perf_counter()
    try:
        lines = compute_line_diff(old_text, new_text)
        result = TextDiffResult(
            left_label=left_label,
            right_label=right_label,
            total_left_lines=len(split_lines(old_text)),
            total_right_lines=len(split_lines(new_text)),
            lines=lines,
            stats=compute_stats(lines),
        )
    except Exception as error:
        plugin_manager.on_diff_end(
            DiffEndEvent(
                left_label=left_label,
                right_label=right_label,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    plugin_manager.on_diff_end(
        DiffEndEvent(
            left_label=left_label,
            right_label=right_label,
            status="ok",
            identical=result.identical,
            summary=result.stats.to_dict(),
            duration_ms=round((time.perf_counter() - started) * 1000.0, 6),
        )
    )
    return result


def diff_files(
    left_path: str | Path,
    right_path: str | Path,
    *,
    encoding: str = "utf-8",
    normalize_newlines: bool = False,
    swap: bool = False,
) -> TextDiffResult:
    """Read two text files and diff them.

    Raises ``TextInputError`` subclasses when either input cannot be read
    or decoded.
    """
    old_text = read_text(left_path, encoding=encoding, normalize=normalize_newlines)
    new_text = read_text(right_path, encoding=encoding, normalize=normalize_newlines)
    return diff_texts(
        old_text,
        new_text,
        left_label=str(left_path),
        right_label=str(right_path),
        swap=swap,
    )
