from __future__ import annotations

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.text.tokenize import Sequence
from spellrank.utils.cancel import CancelToken


_INF = float("inf")

# Rows between cancellation checks inside one candidate.
CANCEL_CHECK_ROWS = 64


def bounded_distance(
    a: Sequence,
    b: Sequence,
    max_distance: int,
    cost: CostModel = DEFAULT_COSTS,
    *,
    transpositions: bool = False,
    cancel: CancelToken | None = None,
) -> int | None:
    """Exact distance if it is <= max_distance, otherwise None.

    Only a diagonal band of half-width max_distance // min(insert, delete)
    is computed: every step off the diagonal costs at least one insert or
    delete, so cells further out can never lead to an admissible result.
    Gives up as soon as a row (and, with transpositions, the row before it)
    has no live cell within the threshold. Inputs must already be
    validated sequences.
    """
    if a == b:
        return 0
    m, n = len(a), len(b)
    step = cost.min_indel
    if abs(m - n) * step > max_distance:
        return None
    k = max_distance // step

    ins, dele, sub, tr = cost.insert, cost.delete, cost.substitute, cost.transpose
    prev2: list[float] = []
    prev: list[float] = [j * ins if j <= k else _INF for j in range(n + 1)]
    prev_min = min(prev[: k + 1])
    for i in range(1, m + 1):
        if cancel is not None and i % CANCEL_CHECK_ROWS == 0:
            cancel.raise_if_cancelled()
        ca = a[i - 1]
        cur: list[float] = [_INF] * (n + 1)
        if i <= k:
            cur[0] = i * dele
        lo = max(1, i - k)
        hi = min(n, i + k)
        for j in range(lo, hi + 1):
            cb = b[j - 1]
            if ca == cb:
                v = prev[j - 1]
            else:
                v = min(cur[j - 1] + ins, prev[j] + dele, prev[j - 1] + sub)
            if transpositions and i > 1 and j > 1 and ca == b[j - 2] and a[i - 2] == cb:
                v = min(v, prev2[j - 2] + tr)
            cur[j] = v
        row_min = min(cur[max(0, i - k) : hi + 1])
        if row_min > max_distance and (not transpositions or prev_min > max_distance):
            return None
        prev2, prev, prev_min = prev, cur, row_min

    result = prev[n]
    if result > max_distance:
        return None
    return int(result)
