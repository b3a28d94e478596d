import itertools

import pytest

from spellrank.distance.costs import CostModel
from spellrank.distance.levenshtein import distance, edit_distance, edit_trace, levenshtein
from spellrank.distance.osa import osa_distance
from spellrank.utils.errors import ConfigError


def _strings(alphabet: str, max_len: int) -> list[str]:
    out = [""]
    for n in range(1, max_len + 1):
        out += ["".join(p) for p in itertools.product(alphabet, repeat=n)]
    return out


def test_levenshtein_strings():
    assert levenshtein("kitten", "sitting") == 3


def test_levenshtein_tokens():
    assert levenshtein(["a", "b", "c"], ["a", "c"]) == 1


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("hear", "here", 2),
        ("kitten", "sitting", 3),
        ("competers", "computer", 2),
        ("saturday", "sunday", 3),
        ("intention", "execution", 5),
        ("flaw", "lawn", 2),
        ("ab", "ba", 2),
        ("", "", 0),
    ],
)
def test_known_distances(a, b, expected):
    assert distance(a, b) == expected


def test_identity_and_empty_base_cases():
    cost = CostModel(insert=2, delete=3)
    for s in ["", "a", "abc", "hello"]:
        assert distance(s, s, cost) == 0
        assert distance("", s, cost) == len(s) * 2
        assert distance(s, "", cost) == len(s) * 3


def test_asymmetric_costs_survive_operand_swap():
    cost = CostModel(insert=2, delete=5)
    assert distance("ab", "abcd", cost) == 4
    assert distance("abcd", "ab", cost) == 10


def test_symmetry_unit_costs():
    words = _strings("ab", 3) + ["kitten", "sitting", "receive"]
    for a, b in itertools.product(words, repeat=2):
        assert distance(a, b) == distance(b, a)


def test_triangle_inequality_classic():
    words = _strings("abc", 2) + ["abc", "cab", "bca"]
    for a, b, c in itertools.product(words, repeat=3):
        assert distance(a, c) <= distance(a, b) + distance(b, c)


def test_triangle_inequality_fails_for_osa():
    # "ca" -> "ac" is one swap and "ac" -> "abc" one insert, but OSA may not
    # edit between the swapped units, so "ca" -> "abc" costs 3.
    assert osa_distance("ca", "ac") == 1
    assert osa_distance("ac", "abc") == 1
    assert osa_distance("ca", "abc") == 3
    assert osa_distance("ca", "abc") > osa_distance("ca", "ac") + osa_distance("ac", "abc")


@pytest.mark.parametrize(
    "cost",
    [
        CostModel(),
        CostModel(insert=2, delete=1, substitute=3, transpose=1),
        CostModel(insert=1, delete=4, substitute=2, transpose=5),
    ],
)
@pytest.mark.parametrize("transpositions", [False, True])
def test_two_row_and_full_grid_agree(cost, transpositions):
    words = _strings("ab", 3) + ["abba", "baab"]
    for a, b in itertools.product(words, repeat=2):
        d = edit_distance(a, b, cost, transpositions=transpositions)
        assert d == edit_trace(a, b, cost, transpositions=transpositions)[0]


@pytest.mark.parametrize("field", ["insert", "delete", "substitute", "transpose"])
@pytest.mark.parametrize("bad", [0, -1])
def test_non_positive_cost_rejected(field, bad):
    cost = CostModel(**{field: bad})
    with pytest.raises(ConfigError):
        distance("a", "b", cost)


def test_case_sensitive_by_default():
    assert distance("Word", "word") == 1
