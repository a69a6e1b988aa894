import pytest

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz.constants import CONSTRICTION, DEFAULT_INTERVAL_MS, DEFAULT_PARTICLES
from swarmviz.functions import Objective


def test_defaults():
    cfg = SwarmConfig()
    assert cfg.n_particles == DEFAULT_PARTICLES == 20
    assert cfg.objective is Objective.SPHERE
    assert cfg.interval_ms == DEFAULT_INTERVAL_MS == 100
    assert (cfg.params.w, cfg.params.c1, cfg.params.c2) == (0.5, 1.5, 1.5)


@pytest.mark.parametrize("kwargs", [
    {"w": -0.1}, {"w": 1.01}, {"c1": 3.5}, {"c2": -1.0},
])
def test_params_out_of_range(kwargs):
    with pytest.raises(ValueError):
        PSOParams(**kwargs)


def test_from_preset_ignores_none_overrides():
    p = PSOParams.from_preset(CONSTRICTION, w=None, c1=2.0, c2=None)
    assert p.w == CONSTRICTION['w']
    assert p.c1 == 2.0
    assert p.c2 == CONSTRICTION['c2']


@pytest.mark.parametrize("n", [4, 51, 0])
def test_particle_count_bounds(n):
    with pytest.raises(ValueError, match="n_particles"):
        SwarmConfig(n_particles=n)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        SwarmConfig(interval_ms=0)


def test_objective_name_is_resolved():
    assert SwarmConfig(objective="himmelblau").objective is Objective.HIMMELBLAU
    with pytest.raises(ValueError):
        SwarmConfig(objective="nope")


def test_needs_reset_only_for_count_and_objective():
    cfg = SwarmConfig()
    assert not cfg.needs_reset(cfg.with_changes(params=PSOParams(w=0.9)))
    assert not cfg.needs_reset(cfg.with_changes(interval_ms=250))
    assert cfg.needs_reset(cfg.with_changes(n_particles=30))
    assert cfg.needs_reset(cfg.with_changes(objective=Objective.BEALE))
