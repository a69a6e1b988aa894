"""
Stateful owner of one swarm for interactive and headless use.

The optimizer in `core` is pure; this class keeps the current state, the
active settings and the RNG, and applies control changes with the reset rules:
  • coefficients and step interval take effect on the next step,
  • particle count and objective rebuild the swarm.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz import core
from swarmviz.core import SwarmState
from swarmviz.run_logger import RunLogger

logger = logging.getLogger(__name__)


def format_status(state: SwarmState) -> str:
    """One-line status; the inf sentinel is shown as n/a, never as a number."""
    gb = state.global_best
    if gb.found:
        best = f"Best Fitness: {gb.fitness:.4f} | Best Position: ({gb.x:.2f}, {gb.y:.2f})"
    else:
        best = "Best Fitness: n/a | Best Position: n/a"
    return f"Iteration: {state.iteration} | {best}"


class SwarmDriver:
    def __init__(self, config: Optional[SwarmConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or SwarmConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.state = core.initialize(self.config.n_particles, self.config.objective, self.rng)

    @property
    def params(self) -> PSOParams:
        return self.config.params

    @property
    def interval_ms(self) -> int:
        return self.config.interval_ms

    def reset(self) -> SwarmState:
        self.state = core.initialize(self.config.n_particles, self.config.objective, self.rng)
        logger.debug("reset: %d particles on %s",
                     self.config.n_particles, self.config.objective.value)
        return self.state

    def step(self) -> SwarmState:
        self.state = core.step(self.state, self.config.params, self.rng)
        return self.state

    def run(self, steps: int, run_logger: Optional[RunLogger] = None) -> SwarmState:
        """Advance `steps` times, buffering one log row per step if a logger is given."""
        if steps < 0:
            raise ValueError("steps must be >= 0.")
        for _ in range(steps):
            self.step()
            if run_logger is not None:
                run_logger.log_step(self.state)
        return self.state

    def configure(self, config: SwarmConfig) -> bool:
        """Swap in new settings; returns True when the swarm had to be rebuilt."""
        must_reset = self.config.needs_reset(config)
        self.config = config
        if must_reset:
            self.reset()
        return must_reset

    def set_coefficients(self, w=None, c1=None, c2=None) -> None:
        params = PSOParams.from_preset(vars(self.config.params), w=w, c1=c1, c2=c2)
        self.configure(self.config.with_changes(params=params))

    def set_interval(self, interval_ms: int) -> None:
        self.configure(self.config.with_changes(interval_ms=int(interval_ms)))

    def set_particle_count(self, n_particles: int) -> None:
        self.configure(self.config.with_changes(n_particles=int(n_particles)))

    def set_objective(self, objective) -> None:
        self.configure(self.config.with_changes(objective=objective))

    def describe(self) -> str:
        return format_status(self.state)
