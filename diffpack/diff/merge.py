"""Pair adjacent delete/insert runs into modified lines."""

from __future__ import annotations

from typing import Sequence

from diffpack.diff.inline import compute_inline_changes
from diffpack.diff.models import DiffLine


def merge_adjacent_changes(lines: Sequence[DiffLine]) -> list[DiffLine]:
    """Rewrite delete runs followed by insert runs as modified lines.

    Pairing is positional: the k-th deleted line goes with the k-th inserted
    line, with no search for a better partner. Unpaired deletes follow the
    modified lines, then unpaired inserts.
    """
    result: list[DiffLine] = []
    index = 0
    count = len(lines)

    while index < count:
        current = lines[index]
        if current.kind != "delete":
            result.append(current)
            index += 1
            continue

        cursor = index
        deletes: list[DiffLine] = []
        while cursor < count and lines[cursor].kind == "delete":
            deletes.append(lines[cursor])
            cursor += 1

        inserts: list[DiffLine] = []
        while cursor < count and lines[cursor].kind == "insert":
            inserts.append(lines[cursor])
            cursor += 1

        pair_count = min(len(deletes), len(inserts))
        for deleted, inserted in zip(deletes[:pair_count], inserts[:pair_count]):
            result.append(
                DiffLine(
                    kind="modified",
                    left_line_number=deleted.left_line_number,
                    right_line_number=inserted.right_line_number,
                    left_text=deleted.left_text,
                    right_text=inserted.right_text,
                    inline_changes=tuple(
                        compute_inline_changes(
                            deleted.left_text or "",
                            inserted.right_text or "",
                        )
                    ),
                )
            )

        result.extend(deletes[pair_count:])
        result.extend(inserts[pair_count:])
        index = cursor

    return result
