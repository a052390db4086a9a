from diffpack.core import DIFF_KINDS
from diffpack.diff import DiffLine, DiffStats, compute_line_diff, compute_stats


def test_stats_of_empty_script_are_zero() -> None:
    stats = compute_stats([])

    assert stats == DiffStats()
    assert stats.total == 0
    assert stats.changed == 0


def test_stats_count_each_kind() -> None:
    lines = [
        DiffLine.equal(1, 1, "a", "a"),
        DiffLine.delete(2, "b"),
        DiffLine.delete(3, "c"),
        DiffLine.insert(2, "d"),
        DiffLine(
            kind="modified",
            left_line_number=4,
            right_line_number=3,
            left_text="e",
            right_text="f",
        ),
    ]

    stats = DiffStats.from_lines(lines)

    assert stats.to_dict() == {
        "added": 1,
        "deleted": 2,
        "modified": 1,
        "unchanged": 1,
        "total": 5,
    }
    assert stats.changed == 4


def test_stats_match_line_diff() -> None:
    lines = compute_line_diff("foo\nbar\nbaz\nold", "foo\nbaz\nnew\nextra")

    stats = compute_stats(lines)

    assert stats.total == len(lines)
    assert stats.added + stats.deleted + stats.modified + stats.unchanged == stats.total
    assert stats.unchanged == 2


def test_stats_accept_any_iterable() -> None:
    lines = compute_line_diff("a\nb", "a\nc")

    assert compute_stats(iter(lines)) == compute_stats(lines)


def test_every_line_kind_is_counted() -> None:
    lines = [DiffLine(kind=kind) for kind in DIFF_KINDS]

    stats = compute_stats(lines)

    assert stats.total == len(DIFF_KINDS)
    assert stats.changed == len(DIFF_KINDS) - 1


def test_unrecognised_kind_lands_in_no_bucket() -> None:
    stats = compute_stats([DiffLine(kind="moved"), DiffLine.insert(1, "x")])  # type: ignore[arg-type]

    assert stats == DiffStats(added=1, total=1)
