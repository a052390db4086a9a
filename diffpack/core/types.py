"""Type definitions for diff kinds."""

from typing import Literal

DiffKind = Literal[
    "equal",
    "insert",
    "delete",
    "modified",
]

InlineKind = Literal[
    "equal",
    "insert",
    "delete",
]

# Reconstruction-stage tag; "modified" only appears after merging.
EditOp = InlineKind

DIFF_KINDS: tuple[str, ...] = (
    "equal",
    "insert",
    "delete",
    "modified",
)

INLINE_KINDS: tuple[str, ...] = (
    "equal",
    "insert",
    "delete",
)
