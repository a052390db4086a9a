from diffpack.core.lcs import longest_common_subsequence


def _assert_valid_alignment(a, b, pairs) -> None:
    previous = (-1, -1)
    for i, j in pairs:
        assert i > previous[0]
        assert j > previous[1]
        assert a[i] == b[j]
        previous = (i, j)


def test_empty_inputs_have_no_common_subsequence() -> None:
    assert longest_common_subsequence([], []) == []
    assert longest_common_subsequence(["a"], []) == []
    assert longest_common_subsequence([], ["a"]) == []
    assert longest_common_subsequence("", "abc") == []


def test_identical_sequences_align_every_token() -> None:
    assert longest_common_subsequence(["x", "y", "z"], ["x", "y", "z"]) == [
        (0, 0),
        (1, 1),
        (2, 2),
    ]


def test_disjoint_sequences_align_nothing() -> None:
    assert longest_common_subsequence(["a", "b"], ["c", "d"]) == []


def test_pairs_are_increasing_and_match_tokens() -> None:
    a = "ABCBDAB"
    b = "BDCABA"

    pairs = longest_common_subsequence(a, b)

    assert len(pairs) == 4
    _assert_valid_alignment(a, b, pairs)


def test_tie_break_keeps_unmatched_left_tokens_first() -> None:
    # Both "a" and "b" are valid one-token LCSs; the pinned rule anchors "b".
    assert longest_common_subsequence(["a", "b"], ["b", "a"]) == [(1, 0)]
    assert longest_common_subsequence("ab", "ba") == [(1, 0)]


def test_tie_break_is_deterministic_for_repeated_tokens() -> None:
    a = ["x", "y", "x", "y", "x"]
    b = ["y", "x", "y", "x", "y"]

    first = longest_common_subsequence(a, b)
    second = longest_common_subsequence(list(a), list(b))

    assert first == second
    assert len(first) == 4
    _assert_valid_alignment(a, b, first)


def test_tokens_compare_by_value() -> None:
    a = ["".join(["f", "oo"]), "bar"]
    b = ["foo", "baz"]

    assert longest_common_subsequence(a, b) == [(0, 0)]
