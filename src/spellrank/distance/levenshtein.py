from __future__ import annotations

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.distance.ops import Delete, EditOperation, Insert, Substitute, Transpose
from spellrank.text.tokenize import Sequence, as_sequence


# Predecessor tags for trace mode, listed in tie-break order.
_MATCH = 0
_SUB = 1
_INS = 2
_DEL = 3
_TRANS = 4


def edit_distance(a, b, cost: CostModel = DEFAULT_COSTS, *, transpositions: bool = False) -> int:
    """Edit distance with O(min(n, m)) memory.

    Accepts raw text or token sequences. With transpositions=True an adjacent
    swap counts as one operation (optimal string alignment).
    """
    cost.validate()
    a_seq = as_sequence(a)
    b_seq = as_sequence(b)
    if a_seq == b_seq:
        return 0
    # keep the shorter sequence along the retained rows
    if len(b_seq) > len(a_seq):
        a_seq, b_seq = b_seq, a_seq
        cost = cost.swapped()
    if not b_seq:
        return len(a_seq) * cost.delete

    ins, dele, sub, tr = cost.insert, cost.delete, cost.substitute, cost.transpose
    n = len(b_seq)
    prev2: list[int] = []
    prev = [j * ins for j in range(n + 1)]
    for i, ca in enumerate(a_seq, start=1):
        cur = [i * dele]
        for j, cb in enumerate(b_seq, start=1):
            if ca == cb:
                v = prev[j - 1]
            else:
                v = min(cur[j - 1] + ins, prev[j] + dele, prev[j - 1] + sub)
            if (
                transpositions
                and i > 1
                and j > 1
                and ca == b_seq[j - 2]
                and a_seq[i - 2] == cb
            ):
                v = min(v, prev2[j - 2] + tr)
            cur.append(v)
        prev2, prev = prev, cur
    return prev[-1]


def _fill_grid(
    a: Sequence, b: Sequence, cost: CostModel, transpositions: bool
) -> tuple[list[list[int]], list[list[int]]]:
    m, n = len(a), len(b)
    grid = [[0] * (n + 1) for _ in range(m + 1)]
    tags = [[_MATCH] * (n + 1) for _ in range(m + 1)]
    for j in range(1, n + 1):
        grid[0][j] = j * cost.insert
        tags[0][j] = _INS
    for i in range(1, m + 1):
        grid[i][0] = i * cost.delete
        tags[i][0] = _DEL

    for i in range(1, m + 1):
        ca = a[i - 1]
        row, above = grid[i], grid[i - 1]
        for j in range(1, n + 1):
            cb = b[j - 1]
            if ca == cb:
                best, tag = above[j - 1], _MATCH
            else:
                best, tag = above[j - 1] + cost.substitute, _SUB
            v = row[j - 1] + cost.insert
            if v < best:
                best, tag = v, _INS
            v = above[j] + cost.delete
            if v < best:
                best, tag = v, _DEL
            if transpositions and i > 1 and j > 1 and ca == b[j - 2] and a[i - 2] == cb:
                v = grid[i - 2][j - 2] + cost.transpose
                if v < best:
                    best, tag = v, _TRANS
            row[j] = best
            tags[i][j] = tag
    return grid, tags


def _backtrack(a: Sequence, b: Sequence, tags: list[list[int]]) -> list[EditOperation]:
    # Walks from the bottom-right corner to the origin. Positions are indices
    # into b[:j] + a[i:], the sequence as it looks once every earlier op ran.
    ops: list[EditOperation] = []
    i, j = len(a), len(b)
    while i > 0 or j > 0:
        tag = tags[i][j]
        if tag == _MATCH:
            i -= 1
            j -= 1
        elif tag == _SUB:
            ops.append(Substitute(pos=j - 1, source=a[i - 1], target=b[j - 1]))
            i -= 1
            j -= 1
        elif tag == _INS:
            ops.append(Insert(pos=j - 1, unit=b[j - 1]))
            j -= 1
        elif tag == _DEL:
            ops.append(Delete(pos=j, unit=a[i - 1]))
            i -= 1
        else:
            ops.append(Transpose(pos=j - 2))
            i -= 2
            j -= 2
    ops.reverse()
    return ops


def edit_trace(
    a, b, cost: CostModel = DEFAULT_COSTS, *, transpositions: bool = False
) -> tuple[int, tuple[EditOperation, ...]]:
    """Distance plus the operations that turn a into b, in application order."""
    cost.validate()
    a_seq = as_sequence(a)
    b_seq = as_sequence(b)
    grid, tags = _fill_grid(a_seq, b_seq, cost, transpositions)
    return grid[-1][-1], tuple(_backtrack(a_seq, b_seq, tags))


def distance(a, b, cost: CostModel = DEFAULT_COSTS) -> int:
    """Classic Levenshtein distance (insert, delete, substitute)."""
    return edit_distance(a, b, cost)


def distance_with_trace(a, b, cost: CostModel = DEFAULT_COSTS) -> tuple[int, tuple[EditOperation, ...]]:
    return edit_trace(a, b, cost)


def levenshtein(a: list[str] | str, b: list[str] | str) -> int:
    """Unit-cost Levenshtein distance over strings or token lists.

    Convenience entry point for callers that never configure costs;
    equivalent to distance(a, b).
    """
    return edit_distance(a, b)
