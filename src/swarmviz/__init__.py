"""Particle swarm optimization on 2D benchmark functions, with a live heat-map view."""

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz.core import GlobalBest, Particle, SwarmState, initialize, step
from swarmviz.driver import SwarmDriver
from swarmviz.functions import FUNCTIONS, Objective, evaluate, known_optima

__all__ = [
    "FUNCTIONS",
    "GlobalBest",
    "Objective",
    "PSOParams",
    "Particle",
    "SwarmConfig",
    "SwarmDriver",
    "SwarmState",
    "evaluate",
    "initialize",
    "known_optima",
    "step",
]
