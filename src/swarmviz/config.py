from __future__ import annotations

from dataclasses import dataclass, field, replace

from swarmviz.constants import (
    C_RANGE,
    DEFAULT,
    DEFAULT_INTERVAL_MS,
    DEFAULT_PARTICLES,
    MAX_PARTICLES,
    MIN_PARTICLES,
    W_RANGE,
)
from swarmviz.functions import Objective, get_objective

"""
Dataclass definitions for PSO coefficients and driver settings.

Both are frozen: the driver swaps in a new instance whenever a control changes,
so a step always reads one consistent set of values.
"""


def _check_range(name: str, value: float, bounds: tuple[float, float]) -> None:
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ValueError(f"{name} must be in [{lo}, {hi}], got {value}.")


@dataclass(frozen=True)
class PSOParams:
    w: float = DEFAULT['w']
    c1: float = DEFAULT['c1']
    c2: float = DEFAULT['c2']

    def __post_init__(self):
        _check_range("w", self.w, W_RANGE)
        _check_range("c1", self.c1, C_RANGE)
        _check_range("c2", self.c2, C_RANGE)

    @classmethod
    def from_preset(cls, preset: dict, **overrides) -> "PSOParams":
        """Build params from a preset dict; `None` overrides are ignored."""
        d = {**preset}
        d.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**d)


@dataclass(frozen=True)
class SwarmConfig:
    n_particles: int = DEFAULT_PARTICLES
    objective: Objective = Objective.SPHERE
    params: PSOParams = field(default_factory=PSOParams)
    interval_ms: int = DEFAULT_INTERVAL_MS

    def __post_init__(self):
        if not MIN_PARTICLES <= self.n_particles <= MAX_PARTICLES:
            raise ValueError(
                f"n_particles must be in [{MIN_PARTICLES}, {MAX_PARTICLES}], got {self.n_particles}."
            )
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be > 0.")
        # accept plain names from the CLI
        object.__setattr__(self, "objective", get_objective(self.objective))

    def with_changes(self, **changes) -> "SwarmConfig":
        return replace(self, **changes)

    def needs_reset(self, other: "SwarmConfig") -> bool:
        """Particle count and objective invalidate the current swarm; the rest do not."""
        return (self.n_particles != other.n_particles
                or self.objective != other.objective)
