"""Optimal string alignment (restricted Damerau-Levenshtein).

An adjacent swap costs one transpose, but no substring is edited after it
has been transposed. That restriction keeps the recurrence at three rows,
and it also means the result is not a metric: the triangle inequality can
fail, e.g. d("ca", "abc") = 3 while d("ca", "ac") + d("ac", "abc") = 2.
Never feed this distance into structures that prune on the triangle
inequality (see postprocess.bktree).

Unrestricted Damerau-Levenshtein would need, per unit value, the last row
at which it was seen; it is not implemented here.
"""

from __future__ import annotations

from typing import Callable

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.distance.levenshtein import distance, edit_distance, edit_trace
from spellrank.distance.ops import EditOperation


DistanceFn = Callable[..., int]


def osa_distance(a, b, cost: CostModel = DEFAULT_COSTS) -> int:
    return edit_distance(a, b, cost, transpositions=True)


def osa_distance_with_trace(a, b, cost: CostModel = DEFAULT_COSTS) -> tuple[int, tuple[EditOperation, ...]]:
    return edit_trace(a, b, cost, transpositions=True)


def get_distance_fn(transpositions: bool) -> DistanceFn:
    return osa_distance if transpositions else distance
