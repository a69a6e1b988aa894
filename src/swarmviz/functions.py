"""
2D benchmark objectives (minimization) and their known global optima.

Every function takes `x, y` as floats or as equally shaped numpy arrays, so the
same code evaluates a single particle and a full heat-map grid.
"""
from __future__ import annotations

from enum import Enum

import numpy as np


class Objective(str, Enum):
    SPHERE = "sphere"
    RASTRIGIN = "rastrigin"
    ACKLEY = "ackley"
    ROSENBROCK = "rosenbrock"
    HIMMELBLAU = "himmelblau"
    BEALE = "beale"


def sphere(x, y):
    return x**2 + y**2

def rastrigin(x, y):
    return 20 + (x**2 - 10*np.cos(2*np.pi*x)) + (y**2 - 10*np.cos(2*np.pi*y))

def ackley(x, y):
    return (-20*np.exp(-0.2*np.sqrt(0.5*(x**2 + y**2)))
            - np.exp(0.5*(np.cos(2*np.pi*x) + np.cos(2*np.pi*y)))
            + np.e + 20)

def rosenbrock(x, y):
    return 100*(y - x**2)**2 + (1 - x)**2

def himmelblau(x, y):
    return (x**2 + y - 11)**2 + (x + y**2 - 7)**2

def beale(x, y):
    return ((1.5 - x + x*y)**2
            + (2.25 - x + x*y**2)**2
            + (2.625 - x + x*y**3)**2)


FUNCTIONS = {
    Objective.SPHERE:     {"f": sphere,     "label": "Sphere",     "optima": [(0.0, 0.0)]},
    Objective.RASTRIGIN:  {"f": rastrigin,  "label": "Rastrigin",  "optima": [(0.0, 0.0)]},
    Objective.ACKLEY:     {"f": ackley,     "label": "Ackley",     "optima": [(0.0, 0.0)]},
    Objective.ROSENBROCK: {"f": rosenbrock, "label": "Rosenbrock", "optima": [(1.0, 1.0)]},
    Objective.HIMMELBLAU: {"f": himmelblau, "label": "Himmelblau", "optima": [
        (3.0, 2.0),
        (-2.805118, 3.131312),
        (-3.779310, -3.283186),
        (3.584428, -1.848126),
    ]},
    Objective.BEALE:      {"f": beale,      "label": "Beale",      "optima": [(3.0, 0.5)]},
}

# Final best fitness at or below these counts as a solved run in experiment.py
SUCCESS_THRESHOLDS = {
    Objective.SPHERE: 1e-8,
    Objective.RASTRIGIN: 1e-4,
    Objective.ACKLEY: 1e-4,
    Objective.ROSENBROCK: 1e-4,
    Objective.HIMMELBLAU: 1e-6,
    Objective.BEALE: 1e-6,
}


def get_objective(name) -> Objective:
    """Resolve a tag or its string name (case-insensitive) to an `Objective`."""
    if isinstance(name, Objective):
        return name
    try:
        return Objective(str(name).strip().lower())
    except ValueError:
        valid = ", ".join(o.value for o in Objective)
        raise ValueError(f"Unknown objective '{name}'. Choose from: {valid}.") from None


def evaluate(objective, x, y):
    """Fitness of (x, y) under `objective`; floats in, float out."""
    f = FUNCTIONS[get_objective(objective)]["f"]
    out = f(x, y)
    return float(out) if np.ndim(out) == 0 else out


def known_optima(objective) -> list[tuple[float, float]]:
    return list(FUNCTIONS[get_objective(objective)]["optima"])
