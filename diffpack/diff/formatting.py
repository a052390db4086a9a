"""CLI-friendly rendering for text diff results."""

from __future__ import annotations

from typing import Iterable, Sequence

import typer

from diffpack.diff.models import DiffLine, DiffStats, InlineChange, TextDiffResult

_LEFT_MARKERS = {"equal": " ", "delete": "-", "insert": " ", "modified": "~"}
_RIGHT_MARKERS = {"equal": " ", "delete": " ", "insert": "+", "modified": "~"}
_NUMBER_WIDTH = 5
_GUTTER = " | "


def render_stats_summary(stats: DiffStats) -> str:
    return (
        f"added={stats.added} deleted={stats.deleted} modified={stats.modified} "
        f"unchanged={stats.unchanged} total={stats.total}"
    )


def render_diff_summary(result: TextDiffResult) -> str:
    return f"left={result.left_label} right={result.right_label} " + render_stats_summary(
        result.stats
    )


def render_inline_changes(changes: Iterable[InlineChange], *, color: bool = False) -> str:
    """Render spans on one line, deletions as ``[-x-]`` and insertions as ``{+x+}``."""
    parts: list[str] = []
    for change in changes:
        if change.kind == "equal":
            parts.append(change.text)
        elif change.kind == "delete":
            parts.append(_deleted(change.text, color=color))
        elif change.kind == "insert":
            parts.append(_inserted(change.text, color=color))
    return "".join(parts)


def render_unified(lines: Sequence[DiffLine], *, color: bool = False) -> str:
    """One row per side; a modified line renders as a ``-`` row then a ``+`` row."""
    rows: list[str] = []
    for line in lines:
        if line.kind == "equal":
            rows.append(f"  {line.left_text}")
        elif line.kind == "delete":
            rows.append(_style(f"- {line.left_text}", fg="red", enabled=color))
        elif line.kind == "insert":
            rows.append(_style(f"+ {line.right_text}", fg="green", enabled=color))
        elif line.kind == "modified":
            changes = line.inline_changes or ()
            rows.append(
                _style("- ", fg="red", enabled=color)
                + _side_content(changes, keep="delete", fallback=line.left_text, color=color)
            )
            rows.append(
                _style("+ ", fg="green", enabled=color)
                + _side_content(changes, keep="insert", fallback=line.right_text, color=color)
            )
    return "\n".join(rows)


def render_side_by_side(lines: Sequence[DiffLine], *, color: bool = False) -> str:
    """Two-column view with line numbers, ``-``/``+``/``~`` markers and inline spans.

    The left column is padded to the visible width of its widest cell, so
    ANSI escapes never shift the gutter.
    """
    cells: list[tuple[str, str]] = []
    for line in lines:
        changes = line.inline_changes or ()
        if line.kind == "modified":
            left_shown = _side_content(changes, keep="delete", fallback=line.left_text, color=color)
            right_shown = _side_content(
                changes, keep="insert", fallback=line.right_text, color=color
            )
        else:
            left_shown = line.left_text or ""
            right_shown = line.right_text or ""
        cells.append((left_shown, right_shown))

    widths = [_visible_width(left_shown) for left_shown, _ in cells]
    column_width = max(widths, default=0)

    rows: list[str] = []
    for line, (left_shown, right_shown), width in zip(lines, cells, widths):
        padding = " " * (column_width - width)
        left = (
            f"{_number(line.left_line_number)} "
            f"{_marker(_LEFT_MARKERS[line.kind], line.kind, color=color)} "
            f"{left_shown}{padding}"
        )
        right = (
            f"{_number(line.right_line_number)} "
            f"{_marker(_RIGHT_MARKERS[line.kind], line.kind, color=color)} "
            f"{right_shown}"
        )
        rows.append((left + _GUTTER + right).rstrip())
    return "\n".join(rows)


def _side_content(
    changes: Sequence[InlineChange],
    *,
    keep: str,
    fallback: str | None,
    color: bool,
) -> str:
    if not changes:
        return fallback or ""
    parts: list[str] = []
    for change in changes:
        if change.kind == "equal":
            parts.append(change.text)
        elif change.kind != keep:
            continue
        elif keep == "delete":
            parts.append(_deleted(change.text, color=color))
        else:
            parts.append(_inserted(change.text, color=color))
    return "".join(parts)


def _deleted(text: str, *, color: bool) -> str:
    if color:
        return typer.style(text, fg="red", strikethrough=True)
    return f"[-{text}-]"


def _inserted(text: str, *, color: bool) -> str:
    if color:
        return typer.style(text, fg="green", underline=True)
    return "{+" + text + "+}"


def _marker(marker: str, kind: str, *, color: bool) -> str:
    if not color or marker == " ":
        return marker
    colors = {"delete": "red", "insert": "green", "modified": "yellow"}
    return typer.style(marker, fg=colors[kind], bold=True)


def _number(value: int | None) -> str:
    return f"{value:>{_NUMBER_WIDTH}}" if value is not None else " " * _NUMBER_WIDTH


def _style(text: str, *, fg: str, enabled: bool) -> str:
    return typer.style(text, fg=fg) if enabled else text


def _visible_width(text: str) -> int:
    return len(typer.unstyle(text))
