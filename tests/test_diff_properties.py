import random

import pytest

from diffpack.diff import DiffLine, compute_inline_changes, compute_line_diff, compute_stats
from diffpack.diff.inline import left_side_text, right_side_text

_VOCABULARY = ["alpha", "beta", "gamma", "delta", "", "beta gamma", "omega"]


def _random_text(rng: random.Random) -> str:
    return "\n".join(rng.choice(_VOCABULARY) for _ in range(rng.randint(0, 8)))


def _random_line(rng: random.Random) -> str:
    return "".join(rng.choice("abcab ") for _ in range(rng.randint(0, 12)))


def _text_pairs(count: int, seed: int) -> list[tuple[str, str]]:
    rng = random.Random(seed)
    return [(_random_text(rng), _random_text(rng)) for _ in range(count)]


def _left_lines(lines: list[DiffLine]) -> list[str]:
    return [line.left_text for line in lines if line.left_text is not None]


def _right_lines(lines: list[DiffLine]) -> list[str]:
    return [line.right_text for line in lines if line.right_text is not None]


@pytest.mark.parametrize("old_text,new_text", _text_pairs(60, seed=11))
def test_both_texts_can_be_rebuilt_from_the_diff(old_text: str, new_text: str) -> None:
    lines = compute_line_diff(old_text, new_text)

    assert "\n".join(_left_lines(lines)) == old_text
    assert "\n".join(_right_lines(lines)) == new_text


@pytest.mark.parametrize("old_text,new_text", _text_pairs(60, seed=23))
def test_line_numbers_increase_by_one_per_side(old_text: str, new_text: str) -> None:
    lines = compute_line_diff(old_text, new_text)

    left_numbers = [line.left_line_number for line in lines if line.left_line_number is not None]
    right_numbers = [
        line.right_line_number for line in lines if line.right_line_number is not None
    ]
    assert left_numbers == list(range(1, len(old_text.split("\n")) + 1))
    assert right_numbers == list(range(1, len(new_text.split("\n")) + 1))


@pytest.mark.parametrize("old_text,new_text", _text_pairs(60, seed=37))
def test_row_shapes_match_their_kind(old_text: str, new_text: str) -> None:
    for line in compute_line_diff(old_text, new_text):
        if line.kind == "equal":
            assert line.left_text == line.right_text
            assert line.inline_changes is None
        elif line.kind == "insert":
            assert line.left_line_number is None and line.left_text is None
            assert line.right_line_number is not None
        elif line.kind == "delete":
            assert line.right_line_number is None and line.right_text is None
            assert line.left_line_number is not None
        else:
            assert line.kind == "modified"
            assert line.inline_changes is not None
            assert left_side_text(line.inline_changes) == line.left_text
            assert right_side_text(line.inline_changes) == line.right_text


@pytest.mark.parametrize("old_text,new_text", _text_pairs(40, seed=41))
def test_merged_output_never_has_a_delete_followed_by_insert(
    old_text: str, new_text: str
) -> None:
    lines = compute_line_diff(old_text, new_text)

    for previous, current in zip(lines, lines[1:]):
        assert not (previous.kind == "delete" and current.kind == "insert")


@pytest.mark.parametrize("old_text,new_text", _text_pairs(40, seed=53))
def test_stats_agree_with_rows(old_text: str, new_text: str) -> None:
    lines = compute_line_diff(old_text, new_text)
    stats = compute_stats(lines)

    assert stats.total == len(lines)
    assert stats.added == sum(1 for line in lines if line.kind == "insert")
    assert stats.deleted == sum(1 for line in lines if line.kind == "delete")
    assert stats.modified == sum(1 for line in lines if line.kind == "modified")
    assert stats.unchanged == sum(1 for line in lines if line.kind == "equal")


@pytest.mark.parametrize("old_text,new_text", _text_pairs(40, seed=67))
def test_swapping_inputs_mirrors_the_counts(old_text: str, new_text: str) -> None:
    forward = compute_stats(compute_line_diff(old_text, new_text))
    backward = compute_stats(compute_line_diff(new_text, old_text))

    assert forward.unchanged == backward.unchanged
    assert forward.deleted + forward.modified == backward.added + backward.modified
    assert forward.added + forward.modified == backward.deleted + backward.modified


@pytest.mark.parametrize("old_text,new_text", _text_pairs(20, seed=71))
def test_diff_is_deterministic(old_text: str, new_text: str) -> None:
    assert compute_line_diff(old_text, new_text) == compute_line_diff(old_text, new_text)


def test_inline_spans_rebuild_both_lines_and_alternate_kinds() -> None:
    rng = random.Random(83)
    for _ in range(200):
        old_line = _random_line(rng)
        new_line = _random_line(rng)

        changes = compute_inline_changes(old_line, new_line)

        assert left_side_text(changes) == old_line
        assert right_side_text(changes) == new_line
        assert all(change.text for change in changes)
        for previous, current in zip(changes, changes[1:]):
            assert previous.kind != current.kind


def test_swapped_inline_spans_mirror_character_counts() -> None:
    rng = random.Random(97)
    for _ in range(100):
        old_line = _random_line(rng)
        new_line = _random_line(rng)

        forward = compute_inline_changes(old_line, new_line)
        backward = compute_inline_changes(new_line, old_line)

        def _chars(changes, kind: str) -> int:
            return sum(len(change.text) for change in changes if change.kind == kind)

        assert _chars(forward, "equal") == _chars(backward, "equal")
        assert _chars(forward, "delete") == _chars(backward, "insert")
        assert _chars(forward, "insert") == _chars(backward, "delete")
