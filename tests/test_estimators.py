import numpy as np
import pytest
from pytest import raises

from pydatadriven import (
    DMDBase,
    DMDPINV,
    DMDSVD,
    TOTALDMD,
    DataDrivenProblem,
    FbDMD,
    solve,
)
from pydatadriven.errors import (
    DimensionMismatch,
    SingularOperatorWarning,
    UnsupportedProblemKind,
)

from .utils import linear_continuous_data, linear_discrete_data, noisy_data


def test_base_not_implemented():
    X = np.random.rand(2, 5)
    with raises(NotImplementedError):
        DMDBase().estimate(X[:, :-1], X[:, 1:])


def test_shape_mismatch():
    with raises(DimensionMismatch):
        DMDPINV().estimate(np.ones((2, 4)), np.ones((2, 3)))


def test_control_mismatch():
    with raises(DimensionMismatch):
        DMDPINV().estimate(np.ones((2, 4)), np.ones((2, 4)), np.ones((1, 3)))


def test_invalid_kind():
    X = np.random.rand(2, 5)
    with raises(ValueError):
        DMDSVD().estimate(X[:, :-1], X[:, 1:], kind="direct")


def test_empty_control_ignored():
    _, X = linear_discrete_data()
    operator = DMDPINV().estimate(X[:, :-1], X[:, 1:], np.zeros((0, 10)))
    assert operator.n_controls == 0


def test_estimate_kind_and_dt():
    _, X = linear_discrete_data()
    operator = DMDSVD().estimate(X[:, :-1], X[:, 1:], dt=0.1)
    assert operator.kind == "discrete"
    assert operator.dt == 0.1


@pytest.mark.parametrize(
    "alg, expected",
    [
        (DMDPINV(), "DMDPINV(svd_rank=-1)"),
        (DMDSVD(3), "DMDSVD(svd_rank=3)"),
        (FbDMD(0.9), "FbDMD(svd_rank=0.9)"),
        (TOTALDMD(2), "TOTALDMD(tlsq_rank=2, inner=DMDPINV(svd_rank=-1))"),
    ],
)
def test_repr(alg, expected):
    assert repr(alg) == expected


def test_pinv_ignores_truncation():
    A, X = linear_discrete_data()
    operator = DMDPINV(1).estimate(X[:, :-1], X[:, 1:])
    assert operator.rank == 2
    assert not operator.is_reduced
    np.testing.assert_allclose(operator.K, A, atol=1e-8)


def test_svd_rank_clamped():
    A, X = linear_discrete_data()
    operator = DMDSVD(10).estimate(X[:, :-1], X[:, 1:])
    assert operator.rank == 2
    np.testing.assert_allclose(operator.K, A, atol=1e-8)


def test_svd_truncated_modes():
    _, X = noisy_data()
    operator = DMDSVD(1).estimate(X[:, :-1], X[:, 1:])

    assert operator.is_reduced
    assert operator.rank == 1
    assert operator.Q.shape == (2, 1)
    assert operator.modes.shape == (2, 1)


def test_svd_optimal_rank():
    A, X = linear_discrete_data()
    operator = DMDSVD(0).estimate(X[:, :-1], X[:, 1:])
    assert 1 <= operator.rank <= 2


def test_totaldmd_invalid_inner():
    with raises(ValueError):
        TOTALDMD(inner="DMDSVD")


def test_totaldmd_inner_rank():
    totaldmd = TOTALDMD(inner=DMDSVD(2))
    assert totaldmd.svd_rank == 2
    assert isinstance(totaldmd.inner, DMDSVD)
    assert totaldmd.tlsq_rank is None


def test_totaldmd_disabled_projection():
    A, X = noisy_data(sigma=1e-2)
    tls = TOTALDMD(-1, DMDPINV()).estimate(X[:, :-1], X[:, 1:])
    pinv = DMDPINV().estimate(X[:, :-1], X[:, 1:])
    np.testing.assert_allclose(tls.K, pinv.K)


def test_totaldmd_denoises():
    A, X = noisy_data(sigma=1e-2, seed=4)
    tls = TOTALDMD().estimate(X[:, :-1], X[:, 1:])
    assert np.linalg.norm(tls.K - A) < 5e-2


def test_fbdmd_rejects_continuous():
    A, t, X, DX = linear_continuous_data(n_samples=101)
    problem = DataDrivenProblem.continuous(X, t, DX)
    with raises(UnsupportedProblemKind):
        solve(problem, FbDMD())


def test_totaldmd_fbdmd_rejects_continuous():
    A, t, X, DX = linear_continuous_data(n_samples=101)
    problem = DataDrivenProblem.continuous(X, t, DX)
    with raises(UnsupportedProblemKind):
        solve(problem, TOTALDMD(inner=FbDMD()))


def test_fbdmd_singular_backward():
    A = np.array([[1.0, 0.0], [0.0, 0.0]])
    X0 = np.random.rand(2, 20)
    X1 = A.dot(X0)

    with pytest.warns(SingularOperatorWarning):
        operator = FbDMD().estimate(X0, X1)
    assert np.all(np.isfinite(operator.K))


def test_fbdmd_truncated():
    _, X = noisy_data()
    operator = FbDMD(1).estimate(X[:, :-1], X[:, 1:])
    assert operator.is_reduced
    assert operator.K.shape == (1, 1)
    assert operator.modes.shape == (2, 1)


@pytest.mark.parametrize(
    "alg",
    [DMDPINV(), DMDSVD(), TOTALDMD(), TOTALDMD(inner=DMDSVD()), FbDMD()],
)
def test_zero_snapshots(alg):
    with raises(ValueError):
        alg.estimate(np.zeros((2, 5)), np.zeros((2, 5)))


def test_fbdmd_negative_eigenvalue():
    A = np.diag([0.9, -0.5])
    X = np.zeros((2, 20))
    X[:, 0] = np.array([1.0, 1.0])
    for k in range(1, 20):
        X[:, k] = A.dot(X[:, k - 1])

    operator = FbDMD().estimate(X[:, :-1], X[:, 1:])
    np.testing.assert_allclose(operator.K, A, atol=1e-8)
    np.testing.assert_allclose(
        np.sort(operator.eigenvalues.real), [-0.5, 0.9], atol=1e-8
    )


def test_fbdmd_negative_eigenvalue_truncated():
    Q, _ = np.linalg.qr(np.random.RandomState(2).randn(6, 2))
    A = np.diag([0.9, -0.5])
    Z = np.zeros((2, 20))
    Z[:, 0] = np.array([1.0, 1.0])
    for k in range(1, 20):
        Z[:, k] = A.dot(Z[:, k - 1])
    X = Q.dot(Z)

    operator = FbDMD(2).estimate(X[:, :-1], X[:, 1:])
    assert operator.is_reduced
    np.testing.assert_allclose(
        np.sort(operator.eigenvalues.real), [-0.5, 0.9], atol=1e-8
    )
