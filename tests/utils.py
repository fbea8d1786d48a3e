import numpy as np
from scipy.linalg import expm, helmert

np.random.seed(10)


def linear_discrete_data():
    # x_{k+1} = A x_k, 11 samples
    A = np.array([[0.9, -0.2], [0.0, 0.2]])
    X = np.zeros((2, 11))
    X[:, 0] = np.array([10.0, -10.0])
    for k in range(1, 11):
        X[:, k] = A.dot(X[:, k - 1])
    return A, X


def noisy_data(sigma=0.0, seed=10):
    rng = np.random.RandomState(seed)
    m = 100  # number of snapshot
    A = np.array([[1.0, 1.0], [-1.0, 2.0]])
    A /= np.sqrt(3)
    n = 2
    X = np.zeros((n, m))
    X[:, 0] = np.array([0.5, 1.0])
    # evolve the system and perturb the data with noise
    for k in range(1, m):
        X[:, k] = A.dot(X[:, k - 1])
    return A, X + rng.normal(0.0, sigma, X.shape)


def linear_continuous_data(n_samples=1001, tend=10.0):
    A = np.array([[-0.9, 0.1], [0.0, -0.2]])
    x0 = np.array([10.0, -20.0])
    t = np.linspace(0, tend, n_samples)
    X = np.column_stack([expm(A * ti).dot(x0) for ti in t])
    return A, t, X, A.dot(X)


def rotation_matrix(axis, angle):
    axis = np.asarray(axis, dtype=float)
    axis /= np.linalg.norm(axis)
    cross = np.array(
        [
            [0.0, -axis[2], axis[1]],
            [axis[2], 0.0, -axis[0]],
            [-axis[1], axis[0], 0.0],
        ]
    )
    return (
        np.eye(3)
        + np.sin(angle) * cross
        + (1 - np.cos(angle)) * cross.dot(cross)
    )


def low_rank_data(n=20, m=200, sigma=1e-4, seed=3):
    """
    Damped rotation living in a 3 dimensional subspace of R^n, observed with
    additive gaussian noise.
    """
    rng = np.random.RandomState(seed)
    K_reduced = 0.99 * rotation_matrix([1.0, 1.0, 1.0], 0.3)
    Q, _ = np.linalg.qr(rng.randn(n, 3))

    Z = np.zeros((3, m))
    Z[:, 0] = np.array([1.0, 1.0, 0.0])
    for k in range(1, m):
        Z[:, k] = K_reduced.dot(Z[:, k - 1])

    X = Q.dot(Z) + sigma * rng.randn(n, m)
    return K_reduced, Q, X


def controlled_data(seed=0):
    rng = np.random.RandomState(seed)
    n = 5  # dimension snapshots
    m = 15  # number snapshots
    A = helmert(n, True)
    B = rng.rand(n, n) - 0.5
    u = rng.rand(n, m) - 0.5
    X = np.zeros((n, m))
    X[:, 0] = 0.25
    for i in range(m - 1):
        X[:, i + 1] = A.dot(X[:, i]) + B.dot(u[:, i])
    return {"A": A, "B": B, "X": X, "U": u}


def low_rank_continuous_data(n=20, n_samples=1001, sigma=1e-3, seed=7):
    """
    Damped linear system living in a 3 dimensional subspace of R^n, with
    noisy states and derivatives.
    """
    rng = np.random.RandomState(seed)
    K_reduced = -0.5 * np.eye(3) + np.array(
        [[0.0, 0.0, -0.2], [0.1, 0.0, -0.1], [0.0, -0.2, 0.0]]
    )
    Q, _ = np.linalg.qr(rng.randn(n, 3))

    t = np.linspace(0.0, 10.0, n_samples)
    z0 = np.array([10.0, 0.3, -5.0])
    Z = np.column_stack([expm(K_reduced * ti).dot(z0) for ti in t])

    X = Q.dot(Z) + sigma * rng.randn(n, n_samples)
    DX = Q.dot(K_reduced).dot(Z) + sigma * rng.randn(n, n_samples)
    return K_reduced, Q, t, X, DX
