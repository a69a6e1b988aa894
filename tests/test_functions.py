import numpy as np
import pytest

from swarmviz.functions import (
    FUNCTIONS,
    SUCCESS_THRESHOLDS,
    Objective,
    evaluate,
    get_objective,
    known_optima,
)


@pytest.mark.parametrize("objective", [
    Objective.SPHERE,
    Objective.RASTRIGIN,
    Objective.ACKLEY,
    Objective.ROSENBROCK,
    Objective.BEALE,
])
def test_single_optimum_is_zero(objective):
    (x, y), = known_optima(objective)
    assert evaluate(objective, x, y) == pytest.approx(0.0, abs=1e-9)


def test_himmelblau_all_four_optima():
    optima = known_optima(Objective.HIMMELBLAU)
    assert len(optima) == 4
    for x, y in optima:
        # listed to six decimals, so not exactly zero
        assert evaluate(Objective.HIMMELBLAU, x, y) == pytest.approx(0.0, abs=1e-6)


def test_closed_forms_at_sample_points():
    assert evaluate("sphere", 3.0, 4.0) == 25.0
    assert evaluate("rosenbrock", 0.0, 0.0) == 1.0
    assert evaluate("himmelblau", 0.0, 0.0) == 121.0 + 49.0
    assert evaluate("beale", 0.0, 0.0) == pytest.approx(1.5**2 + 2.25**2 + 2.625**2)
    # integer points sit on rastrigin's cosine peaks of -10 each
    assert evaluate("rastrigin", 1.0, 1.0) == pytest.approx(2.0)
    assert evaluate("ackley", 1.0, 0.0) > 0.0


def test_every_objective_has_table_entries():
    assert set(FUNCTIONS) == set(Objective)
    assert set(SUCCESS_THRESHOLDS) == set(Objective)
    for meta in FUNCTIONS.values():
        assert callable(meta["f"])
        assert meta["optima"]


def test_functions_accept_arrays():
    X, Y = np.meshgrid(np.linspace(-1, 1, 5), np.linspace(-1, 1, 5))
    for obj in Objective:
        Z = evaluate(obj, X, Y)
        assert Z.shape == X.shape
        assert np.all(np.isfinite(Z))


def test_evaluate_returns_python_float():
    assert isinstance(evaluate(Objective.ACKLEY, 0.5, -0.5), float)


def test_get_objective_by_name():
    assert get_objective("Rastrigin") is Objective.RASTRIGIN
    assert get_objective(Objective.BEALE) is Objective.BEALE
    with pytest.raises(ValueError, match="Unknown objective"):
        get_objective("griewank")


def test_known_optima_returns_copy():
    opt = known_optima("sphere")
    opt.append((9.0, 9.0))
    assert known_optima("sphere") == [(0.0, 0.0)]
