"""Engine parameters.

Only the rounding-fixup bounds are tunable. `BASIS` and the word widths are
constants of the arithmetic, not configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class EngineParams:
    transfer_fixup_rounds: int = 8
    transfer_all_fixup_rounds: int = 3

    def __post_init__(self) -> None:
        for name, v in (
            ("transfer_fixup_rounds", self.transfer_fixup_rounds),
            ("transfer_all_fixup_rounds", self.transfer_all_fixup_rounds),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 1:
                raise ValueError(f"{name} must be >= 1: {v}")


DEFAULT_PARAMS = EngineParams()


def params_from_dict(obj: Mapping[str, Any]) -> EngineParams:
    if not isinstance(obj, Mapping):
        raise TypeError("engine params must be a mapping")
    known = {f.name for f in fields(EngineParams)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown engine params: {', '.join(map(str, unknown))}")
    return EngineParams(**dict(obj))


def load_params(path: Path | str) -> EngineParams:
    """Load `EngineParams` from a YAML mapping; an empty document gives the defaults."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return DEFAULT_PARAMS
    return params_from_dict(obj)
