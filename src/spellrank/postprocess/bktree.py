from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.distance.levenshtein import distance
from spellrank.postprocess.rank import BoundedRanking, Candidate, SuggestionResult, validate_request
from spellrank.text.tokenize import Sequence, as_sequence
from spellrank.utils.errors import ConfigError


log = logging.getLogger(__name__)


@dataclass
class BKNode:
    word: Sequence
    children: dict[int, "BKNode"]


class BKTree:
    """Burkhard-Keller tree over the classic edit distance.

    Pruning relies on the triangle inequality and on symmetry, so only the
    classic metric with equal insert and delete costs is accepted. The OSA
    variant is not a metric and must not be indexed here.
    """

    def __init__(self, cost: CostModel = DEFAULT_COSTS):
        cost.validate()
        if cost.insert != cost.delete:
            raise ConfigError("BKTree needs a symmetric cost model (insert == delete)")
        self.cost = cost
        self.root: BKNode | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def _dist(self, a: Sequence, b: Sequence) -> int:
        return distance(a, b, self.cost)

    def add(self, word) -> None:
        seq = as_sequence(word)
        if self.root is None:
            self.root = BKNode(word=seq, children={})
            self._size = 1
            return
        node = self.root
        while True:
            d = self._dist(seq, node.word)
            if d == 0:
                return
            nxt = node.children.get(d)
            if nxt is None:
                node.children[d] = BKNode(word=seq, children={})
                self._size += 1
                return
            node = nxt

    def build(self, words: Iterable) -> "BKTree":
        for w in words:
            self.add(w)
        log.debug("BKTree built with %d word(s)", self._size)
        return self

    def query(self, word, max_distance: int, top_n: int | None = None) -> list[Candidate]:
        """Words within max_distance of word, best first, at most top_n of them.

        The search radius shrinks to the worst kept distance once top_n
        words are held, so later subtrees are pruned harder.
        """
        if self.root is None:
            return []
        seq = as_sequence(word)
        ranking = BoundedRanking(top_n if top_n is not None else self._size, max_distance)
        pending = [self.root]
        while pending:
            node = pending.pop()
            d = self._dist(seq, node.word)
            ranking.offer(Candidate(word=node.word, distance=d))
            radius = ranking.limit
            pending.extend(
                child for edge, child in node.children.items() if abs(edge - d) <= radius
            )
        return ranking.ranked()


def suggest_indexed(query, tree: BKTree, max_distance: int, top_n: int) -> SuggestionResult:
    """Same ordering and bounds as rank.suggest with transpositions off."""
    validate_request(max_distance, top_n, tree.cost)
    return SuggestionResult(candidates=tuple(tree.query(query, max_distance, top_n)))
