import numpy as np
import pytest
from pytest import raises

from pydatadriven import (
    DMDPINV,
    DMDSVD,
    DataDrivenProblem,
    DataDrivenSolution,
    EstimationResult,
    LinearSystem,
    metrics,
    result,
    solve,
)
from pydatadriven.errors import UnsupportedProblemKind

from .utils import linear_discrete_data

metric_keys = {
    "L1",
    "L2",
    "L2_total",
    "RSS",
    "MSE",
    "sample_error",
    "max_error",
    "R2",
}


def discrete_solution(**kwargs):
    A, X = linear_discrete_data()
    problem = DataDrivenProblem.discrete(X, p=[0.9, 0.2])
    return A, X, solve(problem, DMDPINV(), **kwargs)


def test_solution_type():
    _, _, sol = discrete_solution()
    assert isinstance(sol, DataDrivenSolution)
    assert isinstance(sol.estimation, EstimationResult)
    assert isinstance(sol.system, LinearSystem)
    assert not sol.estimation.operator_only
    assert sol.retcode == "success"


def test_operator_only_returns_estimation():
    _, _, est = discrete_solution(operator_only=True)
    assert isinstance(est, EstimationResult)


def test_result():
    A, _, sol = discrete_solution()
    np.testing.assert_allclose(result(sol), A, atol=1e-8)
    np.testing.assert_array_equal(result(sol), sol.result())


def test_metrics():
    _, X, sol = discrete_solution()
    m = metrics(sol)

    assert set(m) == metric_keys
    assert m["L2"].shape == (2,)
    assert m["L1"].shape == (2,)
    assert m["sample_error"].shape == (11,)
    assert m["L2_total"] < 1e-6
    np.testing.assert_allclose(m["R2"], 1.0)


def test_metrics_is_a_copy():
    _, _, sol = discrete_solution()
    metrics(sol)["L2_total"] = 100.0
    assert metrics(sol)["L2_total"] != 100.0


def test_predicted():
    _, X, sol = discrete_solution()
    np.testing.assert_allclose(sol.predicted, X, atol=1e-8)
    assert np.isrealobj(sol.predicted)
    with raises(ValueError):
        sol.predicted[0, 0] = 1.0


def test_immutable():
    _, _, sol = discrete_solution()
    with raises(AttributeError):
        sol.retcode = "failure"


def test_parameters():
    A, _, sol = discrete_solution()
    np.testing.assert_allclose(sol.parameters(), A.ravel(), atol=1e-8)
    np.testing.assert_array_equal(sol.problem_parameters(), [0.9, 0.2])


def test_digits():
    A, _, sol = discrete_solution(digits=1)
    np.testing.assert_array_equal(result(sol), np.round(A, 1))


def test_eval_expression_accepted():
    A, _, sol = discrete_solution(eval_expression=True)
    np.testing.assert_allclose(result(sol), A, atol=1e-8)


def test_invalid_algorithm():
    _, X = linear_discrete_data()
    with raises(ValueError):
        solve(DataDrivenProblem.discrete(X), "DMDPINV")


def test_direct_problem():
    problem = DataDrivenProblem.direct(np.random.rand(2, 5), np.random.rand(1, 5))
    with raises(UnsupportedProblemKind):
        solve(problem, DMDSVD())


def test_repr():
    _, _, sol = discrete_solution()
    assert repr(sol).startswith(
        "DataDrivenSolution(algorithm='DMDPINV', retcode='success'"
    )


@pytest.mark.parametrize("alg", [DMDPINV(), DMDSVD()])
def test_same_operator_twice(alg):
    _, X = linear_discrete_data()
    problem = DataDrivenProblem.discrete(X)
    np.testing.assert_array_equal(
        result(solve(problem, alg)), result(solve(problem, alg))
    )


def test_metrics_arrays_read_only():
    _, _, sol = discrete_solution()
    m = metrics(sol)
    for key in ("L1", "L2", "sample_error", "R2"):
        with raises(ValueError):
            m[key][0] = 99.0
    assert metrics(sol)["L2"][0] != 99.0


def test_cannot_delete_attributes():
    _, _, sol = discrete_solution()
    with raises(AttributeError):
        del sol._metrics
    assert set(metrics(sol)) == metric_keys
