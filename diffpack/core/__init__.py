"""Core primitives shared by the line and character differs."""

from diffpack.core.lcs import longest_common_subsequence
from diffpack.core.types import DIFF_KINDS, INLINE_KINDS, DiffKind, EditOp, InlineKind

__all__ = [
    "DIFF_KINDS",
    "INLINE_KINDS",
    "DiffKind",
    "EditOp",
    "InlineKind",
    "longest_common_subsequence",
]
