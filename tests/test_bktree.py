import itertools

import pytest

from spellrank.distance.costs import CostModel
from spellrank.postprocess.bktree import BKTree, suggest_indexed
from spellrank.postprocess.rank import suggest
from spellrank.utils.errors import ConfigError


WORDS = ["".join(p) for n in range(1, 4) for p in itertools.product("abc", repeat=n)]


@pytest.mark.parametrize("cost", [CostModel(), CostModel(insert=2, delete=2, substitute=3)])
@pytest.mark.parametrize("max_distance", [0, 1, 2, 3])
def test_matches_linear_scan(cost, max_distance):
    tree = BKTree(cost).build(WORDS)
    for query in ["abc", "cab", "aaaa", "b", "ccba"]:
        indexed = suggest_indexed(query, tree, max_distance, 10)
        scanned = suggest(query, WORDS, max_distance, 10, cost, transpositions=False)
        assert indexed == scanned, query


def test_duplicates_stored_once():
    tree = BKTree().build(["cat", "bat", "cat", "cot", "bat"])
    assert len(tree) == 3


def test_empty_tree():
    assert len(suggest_indexed("cat", BKTree(), 2, 5)) == 0


def test_asymmetric_costs_rejected():
    with pytest.raises(ConfigError):
        BKTree(CostModel(insert=1, delete=2))


def test_request_validated():
    tree = BKTree().build(["cat"])
    with pytest.raises(ConfigError):
        suggest_indexed("cat", tree, -1, 5)


@pytest.mark.parametrize("top_n", [1, 3, 7])
def test_query_cut_keeps_best(top_n):
    tree = BKTree().build(WORDS)
    full = tree.query("abca", 3)
    assert tree.query("abca", 3, top_n) == full[:top_n]
    assert [c.sort_key for c in full] == sorted(c.sort_key for c in full)
