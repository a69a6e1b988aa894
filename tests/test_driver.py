import numpy as np
import pytest

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz.core import GlobalBest, SwarmState, particle_at
from swarmviz.driver import SwarmDriver, format_status
from swarmviz.functions import Objective


@pytest.fixture
def driver():
    return SwarmDriver(SwarmConfig(n_particles=12, objective="rastrigin"),
                       rng=np.random.default_rng(5))


def test_starts_fresh(driver):
    assert driver.state.iteration == 0
    assert driver.state.n_particles == 12
    assert not driver.state.global_best.found


def test_step_and_run_advance(driver):
    driver.step()
    assert driver.state.iteration == 1
    driver.run(4)
    assert driver.state.iteration == 5
    with pytest.raises(ValueError):
        driver.run(-1)


def test_coefficients_change_without_reset(driver):
    driver.run(3)
    positions = driver.state.positions.copy()
    driver.set_coefficients(w=0.9)
    assert driver.state.iteration == 3
    np.testing.assert_array_equal(driver.state.positions, positions)
    assert driver.params == PSOParams(w=0.9, c1=1.5, c2=1.5)


def test_interval_change_without_reset(driver):
    driver.run(2)
    driver.set_interval(250)
    assert driver.interval_ms == 250
    assert driver.state.iteration == 2


def test_particle_count_change_resets(driver):
    driver.run(3)
    driver.set_particle_count(30)
    assert driver.state.iteration == 0
    assert driver.state.n_particles == 30
    assert not driver.state.global_best.found


def test_objective_change_resets(driver):
    driver.run(3)
    driver.set_objective("beale")
    assert driver.state.iteration == 0
    assert driver.state.objective is Objective.BEALE
    np.testing.assert_array_equal(driver.state.best_fitness, driver.state.fitness())


def test_invalid_control_value_keeps_old_config(driver):
    with pytest.raises(ValueError):
        driver.set_particle_count(100)
    assert driver.config.n_particles == 12


def test_reset_discards_progress(driver):
    driver.run(10)
    driver.reset()
    assert driver.state.iteration == 0
    assert driver.state.global_best == GlobalBest()


def test_status_hides_sentinel(driver):
    text = driver.describe()
    assert "Iteration: 0" in text
    assert "n/a" in text
    assert "inf" not in text


def test_status_formats_best():
    state = SwarmState.from_particles([particle_at(3.0, 4.0, "sphere")], "sphere",
                                      global_best=GlobalBest(3.0, 4.0, 25.0), iteration=7)
    assert format_status(state) == (
        "Iteration: 7 | Best Fitness: 25.0000 | Best Position: (3.00, 4.00)"
    )


def test_swarm_converges_on_sphere():
    d = SwarmDriver(SwarmConfig(n_particles=20, objective="sphere"),
                    rng=np.random.default_rng(42))
    d.run(150)
    assert d.state.global_best.fitness < 1e-6
