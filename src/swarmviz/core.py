from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from swarmviz.config import PSOParams
from swarmviz.constants import BOUND_HI, BOUND_LO
from swarmviz.functions import FUNCTIONS, Objective, get_objective

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Particle:
    """Read-only view of one particle."""
    x: float
    y: float
    vx: float
    vy: float
    best_x: float
    best_y: float
    best_fitness: float


@dataclass(frozen=True)
class GlobalBest:
    # (0, 0, inf) is the "nothing found yet" sentinel, not a candidate
    x: float = 0.0
    y: float = 0.0
    fitness: float = math.inf

    @property
    def found(self) -> bool:
        return math.isfinite(self.fitness)


@dataclass(frozen=True, eq=False)
class SwarmState:
    """
    Complete swarm after some number of steps.

    Arrays are (n, 2) for positions/velocities/best_positions and (n,) for
    best_fitness. `step` never writes into them; it builds a new state.
    """
    objective: Objective
    positions: np.ndarray
    velocities: np.ndarray
    best_positions: np.ndarray
    best_fitness: np.ndarray
    global_best: GlobalBest = field(default_factory=GlobalBest)
    iteration: int = 0

    @property
    def n_particles(self) -> int:
        return int(self.positions.shape[0])

    @property
    def particles(self) -> list[Particle]:
        return [
            Particle(
                x=float(p[0]), y=float(p[1]),
                vx=float(v[0]), vy=float(v[1]),
                best_x=float(b[0]), best_y=float(b[1]),
                best_fitness=float(bf),
            )
            for p, v, b, bf in zip(self.positions, self.velocities,
                                   self.best_positions, self.best_fitness)
        ]

    def fitness(self) -> np.ndarray:
        """Current fitness of every particle (not the personal bests)."""
        return _evaluate(self.objective, self.positions)

    @classmethod
    def from_particles(
        cls,
        particles,
        objective,
        global_best: GlobalBest | None = None,
        iteration: int = 0,
    ) -> "SwarmState":
        """Assemble a state from Particle records, e.g. a hand-placed swarm."""
        particles = list(particles)
        return cls(
            objective=get_objective(objective),
            positions=np.array([[p.x, p.y] for p in particles], dtype=float).reshape(-1, 2),
            velocities=np.array([[p.vx, p.vy] for p in particles], dtype=float).reshape(-1, 2),
            best_positions=np.array([[p.best_x, p.best_y] for p in particles], dtype=float).reshape(-1, 2),
            best_fitness=np.array([p.best_fitness for p in particles], dtype=float),
            global_best=global_best or GlobalBest(),
            iteration=iteration,
        )


def _evaluate(objective: Objective, X: np.ndarray) -> np.ndarray:
    f = FUNCTIONS[objective]["f"]
    return np.asarray(f(X[:, 0], X[:, 1]), dtype=float)


def particle_at(x: float, y: float, objective, vx: float = 0.0, vy: float = 0.0) -> Particle:
    """A particle at (x, y) whose personal best is its own position."""
    f = float(FUNCTIONS[get_objective(objective)]["f"](x, y))
    return Particle(x=x, y=y, vx=vx, vy=vy, best_x=x, best_y=y, best_fitness=f)


def initialize(
    n_particles: int,
    objective,
    rng: np.random.Generator | None = None,
) -> SwarmState:
    """Fresh swarm: uniform positions in the bounds, zero velocity, no global best."""
    if n_particles <= 0:
        raise ValueError("n_particles must be positive.")
    objective = get_objective(objective)
    rng = rng if rng is not None else np.random.default_rng()

    X = rng.uniform(BOUND_LO, BOUND_HI, size=(n_particles, 2))
    V = np.zeros_like(X)
    fit = _evaluate(objective, X)

    logger.debug("initialized %d particles on %s", n_particles, objective.value)
    return SwarmState(
        objective=objective,
        positions=X,
        velocities=V,
        best_positions=X.copy(),
        best_fitness=fit,
        global_best=GlobalBest(),
        iteration=0,
    )


def step(
    state: SwarmState,
    params: PSOParams,
    rng: np.random.Generator | None = None,
) -> SwarmState:
    """
    Advance the swarm by one PSO update and return the new state.

    Every particle reads the global best as it was when the step began; the
    best improvement found during the step is committed only after all
    particles have moved. The outcome therefore does not depend on the order
    in which particles are listed.
    """
    rng = rng if rng is not None else np.random.default_rng()

    X, V, P = state.positions, state.velocities, state.best_positions
    gb = state.global_best
    G = np.array([gb.x, gb.y], dtype=float)   # frozen snapshot for this step

    # independent draws per particle and per axis
    r1 = rng.random(size=X.shape)
    r2 = rng.random(size=X.shape)
    V_new = params.w * V + params.c1 * r1 * (P - X) + params.c2 * r2 * (G - X)
    X_new = np.clip(X + V_new, BOUND_LO, BOUND_HI)

    fitness = _evaluate(state.objective, X_new)

    # strict improvement only; ties keep the old personal best
    improved = fitness < state.best_fitness
    P_new = P.copy()
    pbest = state.best_fitness.copy()
    P_new[improved] = X_new[improved]
    pbest[improved] = fitness[improved]

    new_gb = gb
    if fitness.size:
        i = int(np.argmin(fitness))
        if fitness[i] < gb.fitness:
            new_gb = GlobalBest(x=float(X_new[i, 0]), y=float(X_new[i, 1]),
                                fitness=float(fitness[i]))
            logger.debug("iteration %d: new global best %.6g at (%.4f, %.4f)",
                         state.iteration + 1, new_gb.fitness, new_gb.x, new_gb.y)

    return SwarmState(
        objective=state.objective,
        positions=X_new,
        velocities=V_new,
        best_positions=P_new,
        best_fitness=pbest,
        global_best=new_gb,
        iteration=state.iteration + 1,
    )
