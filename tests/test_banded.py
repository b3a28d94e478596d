import itertools

import pytest

from spellrank.distance.costs import CostModel
from spellrank.distance.levenshtein import edit_distance
from spellrank.postprocess.banded import bounded_distance
from spellrank.text.tokenize import tokenize
from spellrank.utils.cancel import CancelToken
from spellrank.utils.errors import Cancelled


def _strings(alphabet: str, max_len: int) -> list[str]:
    out = [""]
    for n in range(1, max_len + 1):
        out += ["".join(p) for p in itertools.product(alphabet, repeat=n)]
    return out


@pytest.mark.parametrize(
    "cost",
    [
        CostModel(),
        CostModel(insert=2, delete=2, substitute=3, transpose=1),
        CostModel(insert=1, delete=3, substitute=2, transpose=2),
    ],
)
@pytest.mark.parametrize("transpositions", [False, True])
def test_matches_full_distance_within_threshold(cost, transpositions):
    words = [tokenize(w) for w in _strings("abc", 3)]
    for max_distance in range(0, 4):
        for a, b in itertools.product(words, repeat=2):
            exact = edit_distance(a, b, cost, transpositions=transpositions)
            got = bounded_distance(a, b, max_distance, cost, transpositions=transpositions)
            if exact <= max_distance:
                assert got == exact, (a, b, max_distance)
            else:
                assert got is None, (a, b, max_distance)


def test_length_gap_short_circuits():
    assert bounded_distance(tokenize("a"), tokenize("abcdef"), 2) is None


def test_transposition_kept_inside_band():
    a, b = tokenize("xaby"), tokenize("xbay")
    assert bounded_distance(a, b, 1, transpositions=True) == 1
    assert bounded_distance(a, b, 1, transpositions=False) is None


def test_cancel_between_rows():
    token = CancelToken()
    token.cancel()
    long_word = tokenize("a" * 200)
    with pytest.raises(Cancelled):
        bounded_distance(long_word, long_word[:-1] + ("b",), 3, cancel=token)
