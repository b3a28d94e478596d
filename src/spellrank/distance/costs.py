from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from spellrank.utils.errors import ConfigError


@dataclass(frozen=True)
class CostModel:
    """Per-operation edit costs. All four must be positive integers."""

    insert: int = 1
    delete: int = 1
    substitute: int = 1
    transpose: int = 1

    def validate(self) -> "CostModel":
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{f.name} cost must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigError(f"{f.name} cost must be > 0, got {value}")
        return self

    @property
    def min_indel(self) -> int:
        """Cheapest way to move one step off the diagonal."""
        return min(self.insert, self.delete)

    def swapped(self) -> "CostModel":
        """Cost model for the reversed problem (b -> a): insert and delete trade places."""
        return CostModel(
            insert=self.delete,
            delete=self.insert,
            substitute=self.substitute,
            transpose=self.transpose,
        )

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    @staticmethod
    def from_mapping(data: Mapping[str, Any] | None) -> "CostModel":
        if not data:
            return DEFAULT_COSTS
        if not isinstance(data, Mapping):
            raise ConfigError(f"costs must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(CostModel)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown cost keys: {', '.join(unknown)}")
        return CostModel(**{k: data[k] for k in known if k in data}).validate()


DEFAULT_COSTS = CostModel()
