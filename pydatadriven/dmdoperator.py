"""
Linear operator estimated by Dynamic Mode Decomposition, along with the
projection machinery needed to move between the full and the reduced space.
"""
import logging
import warnings

import numpy as np
import matplotlib.pyplot as plt
from scipy.linalg import expm

from .errors import BranchCutWarning, NonPositiveTimeStep
from .problem import CONTINUOUS, DISCRETE
from .utils import real_if_negligible


def _read_only(X):
    X = np.array(X)
    X.flags.writeable = False
    return X


class DMDOperator:
    """
    Dynamic Mode Decomposition linear operator.

    The operator `K` maps the reduced state at step `i` to the reduced state
    at step `i + 1` (discrete problems) or to its time derivative (continuous
    problems). The full state is recovered as `C z` and projected back as
    `Q^* x`.

    :param numpy.ndarray K: the (reduced) square operator.
    :param numpy.ndarray B: the control matrix, `None` if the system has no
        control input.
    :param numpy.ndarray Q: the orthonormal projection basis. `None` means
        that no reduction took place, hence `Q` is the identity.
    :param numpy.ndarray C: the output matrix, used by every map towards the
        full space (`to_full`, `full_operator`, `full_control`). Defaults to
        `Q`.
    :param str kind: `'discrete'` or `'continuous'`.
    :param float dt: the time step of the data.
    :param numpy.ndarray lift: matrix which maps the eigenvectors of `K` to
        the exact DMD modes (`X1 V S^-1`). If `None`, the modes are computed
        as `C W`.
    """

    def __init__(self, K, B=None, Q=None, C=None, kind=DISCRETE, dt=1.0,
                 lift=None):
        K = np.atleast_2d(K)
        if K.ndim != 2 or K.shape[0] != K.shape[1]:
            raise ValueError(
                "The operator must be a square matrix, got shape {}".format(
                    K.shape
                )
            )
        rank = K.shape[0]

        if B is None:
            B = np.zeros((rank, 0), dtype=K.dtype)
        B = np.atleast_2d(B)
        if B.shape[0] != rank:
            raise ValueError(
                "B has {} rows, expected {}".format(B.shape[0], rank)
            )

        self._reduced = Q is not None
        self._identity_basis = Q is None and C is None
        Q = np.eye(rank) if Q is None else np.atleast_2d(Q)
        C = Q if C is None else np.atleast_2d(C)
        if C.shape[1] != rank or Q.shape[1] != rank:
            raise ValueError(
                "Invalid basis: C {} and Q {} for an operator of rank {}"
                .format(C.shape, Q.shape, rank)
            )

        self._K = _read_only(K)
        self._B = _read_only(B)
        self._Q = _read_only(Q)
        self._C = _read_only(C)
        self._kind = kind
        self._dt = dt
        self._lift = lift

        self._eigenvalues = None
        self._eigenvectors = None

    @property
    def shape(self):
        """Shape of the operator"""
        return self._K.shape

    @property
    def rank(self):
        """Dimension of the space where the operator acts."""
        return self._K.shape[0]

    @property
    def n_states(self):
        return self._C.shape[0]

    @property
    def n_controls(self):
        return self._B.shape[1]

    @property
    def kind(self):
        return self._kind

    @property
    def dt(self):
        return self._dt

    @property
    def is_reduced(self):
        """True if the operator lives in a subspace of the state space."""
        return self._reduced

    def __call__(self, reduced_state, control=None):
        """
        Apply the operator to the reduced representation of a state (or of
        several states stored by column).

        :param numpy.ndarray reduced_state: reduced representation of x{n}.
        :param numpy.ndarray control: control input applied at step n.
        :return: reduced representation of x{n+1} (or of its derivative).
        :rtype: numpy.ndarray
        """
        result = self._K.dot(reduced_state)
        if control is not None and self.n_controls:
            result = result + self._B.dot(control)
        return result

    @property
    def as_numpy_array(self):
        return self._K

    @property
    def K(self):
        return self._K

    @property
    def B(self):
        return self._B

    @property
    def C(self):
        return self._C

    @property
    def Q(self):
        return self._Q

    def _compute_eigenquantities(self):
        """
        Private method that computes eigenvalues and eigenvectors of the
        operator. The decomposition is computed only once.
        """
        if self._eigenvalues is not None:
            return

        logging.info("Eigendecomposition of a %s operator", self.shape)
        eigenvalues, eigenvectors = np.linalg.eig(self._K)
        self._eigenvalues = _read_only(eigenvalues.astype(complex))
        self._eigenvectors = _read_only(eigenvectors.astype(complex))

    @property
    def eigenvalues(self):
        self._compute_eigenquantities()
        return self._eigenvalues

    @property
    def eigenvectors(self):
        self._compute_eigenquantities()
        return self._eigenvectors

    @property
    def modes(self):
        """
        The dynamic modes, i.e. the eigenvectors of the operator lifted to
        the full space, stored by column.
        """
        if self._lift is not None:
            return self._lift.dot(self.eigenvectors)
        return self._C.dot(self.eigenvectors)

    def to_reduced(self, x):
        """
        Project full-space state(s) onto the reduced space.

        :param numpy.ndarray x: full state(s), stored by column.
        :rtype: numpy.ndarray
        """
        if not self._reduced:
            return np.array(x)
        return self._Q.conj().T.dot(x)

    def to_full(self, z):
        """
        Lift reduced state(s) to the full space.

        :param numpy.ndarray z: reduced state(s), stored by column.
        :rtype: numpy.ndarray
        """
        if self._identity_basis:
            return np.array(z)
        return self._C.dot(z)

    def full_operator(self):
        """
        The operator acting on the full state space, `C K Q^*`.

        :rtype: numpy.ndarray
        """
        if self._identity_basis:
            return np.array(self._K)
        return np.linalg.multi_dot([self._C, self._K, self._Q.conj().T])

    def full_control(self):
        """
        The control matrix acting on the full state space, `C B`.

        :rtype: numpy.ndarray
        """
        if self._identity_basis:
            return np.array(self._B)
        return self._C.dot(self._B)

    def _check_dt(self, dt):
        if dt is None:
            dt = self._dt
        if dt <= 0:
            raise NonPositiveTimeStep(
                "Invalid time step {}, expected a positive value.".format(dt)
            )
        return dt

    def continuous_eigenvalues(self, dt=None):
        """
        Continuous-time eigenvalues `log(lambda) / dt`. For continuous
        operators these are the eigenvalues themselves.

        :param float dt: the time step, defaults to the one of the data.
        :rtype: numpy.ndarray
        """
        if self._kind == CONTINUOUS:
            return self.eigenvalues

        dt = self._check_dt(dt)
        eigs = self.eigenvalues
        on_branch_cut = (eigs.imag == 0) & (eigs.real < 0)
        if np.any(on_branch_cut):
            logging.warning(
                "Eigenvalues on the negative real axis: %s",
                eigs[on_branch_cut],
            )
            warnings.warn(
                "The eigenvalues {} lie on the negative real axis, the "
                "principal branch of the logarithm is used.".format(
                    eigs[on_branch_cut]
                ),
                BranchCutWarning,
            )
        return np.log(eigs) / dt

    def continuous_operator(self, dt=None):
        """
        The continuous-time equivalent of the operator,
        `W (log(Lambda) / dt) W^-1`.

        :param float dt: the time step, defaults to the one of the data.
        :rtype: numpy.ndarray
        """
        if self._kind == CONTINUOUS:
            return np.array(self._K)

        omega = self.continuous_eigenvalues(dt)
        W = self.eigenvectors
        operator = np.linalg.multi_dot([W, np.diag(omega), np.linalg.inv(W)])
        if np.isrealobj(self._K):
            operator = real_if_negligible(operator)
        return operator

    def discrete_operator(self, dt=None):
        """
        The discrete-time equivalent of the operator, `expm(K dt)` for
        continuous operators.

        :param float dt: the time step, defaults to the one of the data.
        :rtype: numpy.ndarray
        """
        if self._kind == DISCRETE:
            return np.array(self._K)
        return expm(self._K * self._check_dt(dt))

    @property
    def frequency(self):
        """
        Frequencies of the modes.

        :rtype: numpy.ndarray
        """
        return self.continuous_eigenvalues().imag / (2 * np.pi)

    @property
    def growth_rate(self):
        """
        Growth rates of the modes.

        :rtype: numpy.ndarray
        """
        return self.continuous_eigenvalues().real

    def plot_operator(self, filename=None):
        """
        Plot the (reduced) operator K.

        :param str filename: if specified, the plot is saved at `filename`.
        """

        matrix = self.as_numpy_array
        rmatrix = matrix.real
        cmatrix = matrix.imag

        if np.linalg.norm(cmatrix) > 1.e-12:
            _, axes = plt.subplots(nrows=1, ncols=2)

            axes[0].set_title('Real')
            axes[0].matshow(rmatrix, cmap='jet')
            axes[1].set_title('Imaginary')
            axes[1].matshow(cmatrix, cmap='jet')
        else:
            plt.matshow(rmatrix)
            plt.title('Real')

        if filename:
            plt.savefig(filename)
            plt.close()
        else:
            plt.show()
