"""Seed resolution helpers for deterministic arena generation."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_SEED = 42


# //1.- Define dataclass to encapsulate the generation seed for reproducibility.
@dataclass(frozen=True)
class LayoutSeed:
    """Seed driving every stochastic part of the arena layout."""

    seed: int = DEFAULT_SEED

    # //2.- Build from a mapping when a caller already parsed one.
    @classmethod
    def from_mapping(cls, payload: Optional[Dict[str, int]] = None) -> "LayoutSeed":
        if not payload or "seed" not in payload:
            return cls()
        return cls(seed=int(payload["seed"]))

    # //3.- Allow overriding the seed through environment variables for integration runs.
    @classmethod
    def from_environment(cls, prefix: str = "ARENA") -> "LayoutSeed":
        value = os.getenv(f"{prefix}_SEED")
        mapping: Dict[str, int] = {}
        if value is not None:
            try:
                mapping["seed"] = int(value)
            except ValueError as exc:
                raise ValueError(f"{prefix}_SEED must be an integer, got {value!r}") from exc
        return cls.from_mapping(mapping)


# //4.- Resolve the seed preferring an explicit value over the environment.
def resolve_seed(explicit: Optional[int] = None, *, env_prefix: str = "ARENA") -> int:
    if explicit is not None:
        return int(explicit)
    return LayoutSeed.from_environment(prefix=env_prefix).seed
