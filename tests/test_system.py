import numpy as np
from pytest import raises
from scipy.linalg import expm

from pydatadriven import LinearSystem
from pydatadriven.dmdoperator import DMDOperator


def test_discrete_call():
    A = np.array([[0.9, -0.2], [0.0, 0.2]])
    system = LinearSystem(DMDOperator(A))
    x = np.array([1.0, 2.0])

    assert system.is_discrete
    assert not system.is_continuous
    np.testing.assert_allclose(system(x), A.dot(x))


def test_discrete_simulation():
    A = np.array([[0.9, -0.2], [0.0, 0.2]])
    system = LinearSystem(DMDOperator(A))
    X = system.simulate([1.0, 1.0], np.arange(4))

    assert X.shape == (2, 4)
    np.testing.assert_allclose(X[:, 3], np.linalg.matrix_power(A, 3).dot([1, 1]))


def test_discrete_simulation_with_control():
    A = np.array([[0.5]])
    B = np.array([[1.0]])
    system = LinearSystem(DMDOperator(A, B=B))
    U = np.array([[1.0, 2.0, 3.0]])

    X = system.simulate([0.0], np.arange(3), U)
    np.testing.assert_allclose(X, [[0.0, 1.0, 2.5]])


def test_control_required():
    system = LinearSystem(DMDOperator(np.eye(1), B=np.eye(1)))
    with raises(ValueError):
        system.simulate([0.0], np.arange(3))


def test_not_enough_controls():
    system = LinearSystem(DMDOperator(np.eye(1), B=np.eye(1)))
    with raises(ValueError):
        system.simulate([0.0], np.arange(4), np.ones((1, 2)))


def test_continuous_simulation():
    A = np.array([[-0.9, 0.1], [0.0, -0.2]])
    system = LinearSystem(DMDOperator(A, kind="continuous", dt=0.1))
    t = np.array([0.0, 0.1, 0.3, 1.0])
    x0 = np.array([10.0, -20.0])

    assert system.is_continuous
    np.testing.assert_allclose(system(x0), A.dot(x0))

    X = system.simulate(x0, t)
    for i, ti in enumerate(t):
        np.testing.assert_allclose(X[:, i], expm(A * ti).dot(x0))


def test_continuous_zero_order_hold():
    A = np.array([[-1.0]])
    B = np.array([[2.0]])
    system = LinearSystem(DMDOperator(A, B=B, kind="continuous"))
    X = system.simulate([0.0], [0.0, 0.5], np.array([[1.0, 0.0]]))

    # x(t) = 2 (1 - exp(-t)) for a constant unit input
    np.testing.assert_allclose(X[0, 1], 2.0 * (1.0 - np.exp(-0.5)))


def test_reduced_simulation():
    Q, _ = np.linalg.qr(np.random.rand(5, 2))
    K = np.diag([0.5, 0.9])
    system = LinearSystem(DMDOperator(K, Q=Q))
    x0 = Q.dot([1.0, 1.0])

    X = system.simulate(x0, np.arange(3))
    assert X.shape == (5, 3)
    np.testing.assert_allclose(X[:, 2], Q.dot([0.25, 0.81]))
