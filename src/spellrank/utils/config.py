from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.text.tokenize import NORMAL_FORMS
from spellrank.utils.errors import ConfigError


def load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def _int(section: Mapping[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _flag(section: Mapping[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _seconds(section: Mapping[str, Any], key: str) -> float | None:
    value = section.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number of seconds, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class EngineConfig:
    """Settings shared by the CLI commands.

    YAML layout::

        costs: {insert: 1, delete: 1, substitute: 1, transpose: 1}
        suggest: {max_distance: 2, top_n: 5, transpositions: true,
                  workers: 1, chunk_size: 2048, deadline_s: null}
        tokenize: {casefold: false, normalize: null}
    """

    costs: CostModel = field(default=DEFAULT_COSTS)
    max_distance: int = 2
    top_n: int = 5
    transpositions: bool = True
    workers: int = 1
    chunk_size: int = 2048
    deadline_s: float | None = None
    casefold: bool = False
    normalize: str | None = None

    def validate(self) -> "EngineConfig":
        self.costs.validate()
        if self.max_distance < 0:
            raise ConfigError(f"max_distance must be >= 0, got {self.max_distance}")
        if self.top_n <= 0:
            raise ConfigError(f"top_n must be > 0, got {self.top_n}")
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size < 1:
            raise ConfigError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.deadline_s is not None and self.deadline_s <= 0:
            raise ConfigError(f"deadline_s must be > 0, got {self.deadline_s}")
        if self.normalize is not None and self.normalize not in NORMAL_FORMS:
            raise ConfigError(f"normalize must be one of {NORMAL_FORMS}, got {self.normalize!r}")
        return self

    def tokenize_options(self) -> dict[str, Any]:
        return {"casefold": self.casefold, "normalize": self.normalize}

    def override(self, **changes: Any) -> "EngineConfig":
        """Copy with the non-None keyword arguments applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None}).validate()

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "EngineConfig":
        sg = data.get("suggest") or {}
        tk = data.get("tokenize") or {}
        if not isinstance(sg, Mapping) or not isinstance(tk, Mapping):
            raise ConfigError("'suggest' and 'tokenize' sections must be mappings")
        return EngineConfig(
            costs=CostModel.from_mapping(data.get("costs")),
            max_distance=_int(sg, "max_distance", 2),
            top_n=_int(sg, "top_n", 5),
            transpositions=_flag(sg, "transpositions", True),
            workers=_int(sg, "workers", 1),
            chunk_size=_int(sg, "chunk_size", 2048),
            deadline_s=_seconds(sg, "deadline_s"),
            casefold=_flag(tk, "casefold", False),
            normalize=tk.get("normalize"),
        ).validate()


def load_engine_config(path: Path | None) -> EngineConfig:
    if path is None:
        return EngineConfig()
    return EngineConfig.from_mapping(load_yaml(path))
