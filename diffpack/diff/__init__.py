"""Diff subsystem for diffkit."""

from diffpack.diff.engine import (
    compute_inline_changes,
    compute_line_diff,
    compute_stats,
    diff_files,
    diff_texts,
)
from diffpack.diff.formatting import (
    render_diff_summary,
    render_inline_changes,
    render_side_by_side,
    render_stats_summary,
    render_unified,
)
from diffpack.diff.models import DiffLine, DiffStats, InlineChange, TextDiffResult

__all__ = [
    "DiffLine",
    "InlineChange",
    "DiffStats",
    "TextDiffResult",
    "compute_line_diff",
    "compute_inline_changes",
    "compute_stats",
    "diff_texts",
    "diff_files",
    "render_diff_summary",
    "render_stats_summary",
    "render_inline_changes",
    "render_unified",
    "render_side_by_side",
]
