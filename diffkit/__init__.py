"""Stable public API surface for diffkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from diffpack.diff import (
    DiffLine,
    DiffStats,
    InlineChange,
    TextDiffResult,
    compute_inline_changes,
    compute_line_diff,
    compute_stats,
    diff_files,
    diff_texts,
    render_side_by_side,
    render_unified,
)

__version__ = "0.1.0"

Layout = Literal["side-by-side", "unified"]


def diff(
    old_text: str,
    new_text: str,
    *,
    swap: bool = False,
    left_label: str = "left",
    right_label: str = "right",
) -> TextDiffResult:
    """Diff two texts and return lines plus statistics.

    Args:
        old_text: Original text.
        new_text: New text.
        swap: Diff ``new_text`` against ``old_text`` instead.
        left_label: Name shown for the original side.
        right_label: Name shown for the new side.

    Returns:
        Structured result with per-line rows and aggregate counts.
    """
    return diff_texts(
        old_text,
        new_text,
        left_label=left_label,
        right_label=right_label,
        swap=swap,
    )


def diff_paths(
    left: str | Path,
    right: str | Path,
    *,
    encoding: str = "utf-8",
    normalize_newlines: bool = False,
    swap: bool = False,
) -> TextDiffResult:
    """Diff two text files.

    Args:
        left: Original file path, or ``"-"`` for standard input.
        right: New file path, or ``"-"`` for standard input.
        encoding: Encoding used to decode both files.
        normalize_newlines: Convert CRLF/CR line endings to LF before diffing.
        swap: Diff ``right`` against ``left`` instead.

    Returns:
        Structured result labelled with both paths.

    Raises:
        TextInputError: If a file is missing, unreadable or not decodable.
    """
    return diff_files(
        left,
        right,
        encoding=encoding,
        normalize_newlines=normalize_newlines,
        swap=swap,
    )


def render(
    result: TextDiffResult,
    *,
    layout: Layout = "side-by-side",
    changes_only: bool = False,
    color: bool = False,
) -> str:
    """Render a diff result as plain or ANSI-colored text.

    Args:
        result: Result from ``diff`` or ``diff_paths``.
        layout: ``"side-by-side"`` columns or ``"unified"`` rows.
        changes_only: Drop unchanged lines.
        color: Style inline spans with ANSI escapes instead of ``[-..-]``/``{+..+}`` markers.

    Returns:
        Rendered text without a trailing newline.

    Raises:
        ValueError: If ``layout`` is not supported.
    """
    lines = result.changes_only() if changes_only else result.lines
    if layout == "side-by-side":
        return render_side_by_side(lines, color=color)
    if layout == "unified":
        return render_unified(lines, color=color)
    raise ValueError(f"Unsupported layout: {layout}")


__all__ = [
    "__version__",
    "Layout",
    "DiffLine",
    "InlineChange",
    "DiffStats",
    "TextDiffResult",
    "compute_line_diff",
    "compute_inline_changes",
    "compute_stats",
    "diff",
    "diff_paths",
    "render",
]
