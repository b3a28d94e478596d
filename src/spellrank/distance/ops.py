"""Edit operations produced by trace mode.

Positions refer to the sequence as it stands when the operation is applied,
so a list of operations is replayed strictly left to right.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from spellrank.distance.costs import DEFAULT_COSTS, CostModel


@dataclass(frozen=True)
class Insert:
    pos: int
    unit: str


@dataclass(frozen=True)
class Delete:
    pos: int
    unit: str


@dataclass(frozen=True)
class Substitute:
    pos: int
    source: str
    target: str


@dataclass(frozen=True)
class Transpose:
    """Swap the units at pos and pos + 1."""

    pos: int


EditOperation = Union[Insert, Delete, Substitute, Transpose]


def apply_operations(seq: Iterable[str], ops: Iterable[EditOperation]) -> tuple[str, ...]:
    out = list(seq)
    for op in ops:
        if isinstance(op, Insert):
            if not 0 <= op.pos <= len(out):
                raise ValueError(f"{op!r} out of range for length {len(out)}")
            out.insert(op.pos, op.unit)
        elif isinstance(op, Delete):
            if not 0 <= op.pos < len(out) or out[op.pos] != op.unit:
                raise ValueError(f"{op!r} does not match the sequence")
            del out[op.pos]
        elif isinstance(op, Substitute):
            if not 0 <= op.pos < len(out) or out[op.pos] != op.source:
                raise ValueError(f"{op!r} does not match the sequence")
            out[op.pos] = op.target
        elif isinstance(op, Transpose):
            if not 0 <= op.pos < len(out) - 1:
                raise ValueError(f"{op!r} out of range for length {len(out)}")
            out[op.pos], out[op.pos + 1] = out[op.pos + 1], out[op.pos]
        else:
            raise TypeError(f"Not an edit operation: {op!r}")
    return tuple(out)


def operation_cost(op: EditOperation, cost: CostModel = DEFAULT_COSTS) -> int:
    if isinstance(op, Insert):
        return cost.insert
    if isinstance(op, Delete):
        return cost.delete
    if isinstance(op, Substitute):
        return cost.substitute
    if isinstance(op, Transpose):
        return cost.transpose
    raise TypeError(f"Not an edit operation: {op!r}")


def operations_cost(ops: Iterable[EditOperation], cost: CostModel = DEFAULT_COSTS) -> int:
    return sum(operation_cost(op, cost) for op in ops)
