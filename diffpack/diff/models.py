"""Data models for line diffs, inline spans and change statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from diffpack.core.types import DiffKind, InlineKind


@dataclass(frozen=True, slots=True)
class InlineChange:
    """A contiguous run of characters inside a modified line."""

    kind: InlineKind
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "text": self.text,
        }


@dataclass(frozen=True, slots=True)
class DiffLine:
    """One row of a line-level edit script.

    Insert rows only carry the right side, delete rows only the left side.
    Equal and modified rows carry both; modified rows also carry the
    character-level spans for the pair.
    """

    kind: DiffKind
    left_line_number: int | None = None
    right_line_number: int | None = None
    left_text: str | None = None
    right_text: str | None = None
    inline_changes: tuple[InlineChange, ...] | None = None

    @classmethod
    def equal(cls, left_number: int, right_number: int, left_text: str, right_text: str) -> DiffLine:
        return cls(
            kind="equal",
            left_line_number=left_number,
            right_line_number=right_number,
            left_text=left_text,
            right_text=right_text,
        )

    @classmethod
    def insert(cls, right_number: int, text: str) -> DiffLine:
        return cls(kind="insert", right_line_number=right_number, right_text=text)

    @classmethod
    def delete(cls, left_number: int, text: str) -> DiffLine:
        return cls(kind="delete", left_line_number=left_number, left_text=text)

    @property
    def is_change(self) -> bool:
        return self.kind != "equal"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "left_line_number": self.left_line_number,
            "right_line_number": self.right_line_number,
            "left_text": self.left_text,
            "right_text": self.right_text,
            "inline_changes": (
                [change.to_dict() for change in self.inline_changes]
                if self.inline_changes is not None
                else None
            ),
        }


@dataclass(frozen=True, slots=True)
class DiffStats:
    """Aggregate line counts derived from a finished edit script."""

    added: int = 0
    deleted: int = 0
    modified: int = 0
    unchanged: int = 0
    total: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[DiffLine]) -> DiffStats:
        added = 0
        deleted = 0
        modified = 0
        unchanged = 0

        for line in lines:
            if line.kind == "insert":
                added += 1
            elif line.kind == "delete":
                deleted += 1
            elif line.kind == "modified":
                modified += 1
            elif line.kind == "equal":
                unchanged += 1

        return cls(
            added=added,
            deleted=deleted,
            modified=modified,
            unchanged=unchanged,
            total=added + deleted + modified + unchanged,
        )

    @property
    def changed(self) -> int:
        return self.added + self.deleted + self.modified

    def to_dict(self) -> dict[str, int]:
        return {
            "added": self.added,
            "deleted": self.deleted,
            "modified": self.modified,
            "unchanged": self.unchanged,
            "total": self.total,
        }


@dataclass(slots=True)
class TextDiffResult:
    """Structured diff for two text inputs."""

    left_label: str
    right_label: str
    total_left_lines: int
    total_right_lines: int
    lines: list[DiffLine]
    stats: DiffStats

    @property
    def identical(self) -> bool:
        return all(line.kind == "equal" for line in self.lines)

    @property
    def first_change(self) -> DiffLine | None:
        for line in self.lines:
            if line.is_change:
                return line
        return None

    def changes_only(self) -> list[DiffLine]:
        """Rows with differences, in document order."""
        return [line for line in self.lines if line.is_change]

    def to_dict(self, *, changes_only: bool = False) -> dict[str, Any]:
        lines = self.changes_only() if changes_only else self.lines
        first = self.first_change
        return {
            "left_label": self.left_label,
            "right_label": self.right_label,
            "total_left_lines": self.total_left_lines,
            "total_right_lines": self.total_right_lines,
            "identical": self.identical,
            "changes_only": changes_only,
            "stats": self.stats.to_dict(),
            "first_change": first.to_dict() if first is not None else None,
            "lines": [line.to_dict() for line in lines],
        }
