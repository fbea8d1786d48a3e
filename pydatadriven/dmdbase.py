"""
Base module for the DMD estimators: `_compute_operator` must be implemented
in inherited classes.
"""
import logging

import numpy as np

from .dmdoperator import DMDOperator
from .errors import DimensionMismatch
from .problem import CONTINUOUS, DISCRETE


class DMDBase:
    """
    Dynamic Mode Decomposition base class.

    Every estimator consumes a snapshot pair `(X0, X1)`, optionally with the
    control inputs `U0`, and returns a :class:`DMDOperator`. When control
    inputs are available, the augmented input `[X0; U0]` is used and the
    resulting operator is split column-wise into the state operator `K` and
    the control operator `B`.

    :param svd_rank: the rank for the truncation; if -1, `None` or `'full'`,
        the method does not compute truncation; if 0, the method computes the
        optimal rank and uses it for truncation; if positive interger, the
        method uses the argument for the truncation (clamped to the available
        data); if float between 0 and 1, the rank is the number of the
        biggest singular values that are needed to reach the 'energy'
        specified by `svd_rank`.
    :type svd_rank: int or float or str
    """

    def __init__(self, svd_rank=-1):
        self._svd_rank = svd_rank

    @property
    def svd_rank(self):
        return self._svd_rank

    def __repr__(self):
        return "{}(svd_rank={!r})".format(
            self.__class__.__name__, self._svd_rank
        )

    @staticmethod
    def _split_control(G, n_states):
        """
        Split the operator of the augmented system `[X0; U0]` into the state
        operator and the control operator.
        """
        return G[:, :n_states], G[:, n_states:]

    def _check_snapshots(self, X0, X1, U0):
        if X0.ndim != 2 or X1.ndim != 2:
            raise DimensionMismatch(
                "Expected 2D snapshot matrices (states x samples)."
            )
        if X0.shape != X1.shape:
            raise DimensionMismatch(
                "Snapshot matrices with different shapes: {} and {}.".format(
                    X0.shape, X1.shape
                )
            )
        if X0.shape[1] < 1:
            raise DimensionMismatch("At least one snapshot pair is needed.")
        if not np.any(X0):
            raise ValueError(
                "Cannot estimate an operator from identically zero snapshots."
            )
        if U0 is not None and (U0.ndim != 2 or U0.shape[1] != X0.shape[1]):
            raise DimensionMismatch(
                "Control inputs with shape {} do not match {} samples."
                .format(U0.shape, X0.shape[1])
            )

    def estimate(self, X0, X1, U0=None, B=None, kind=DISCRETE, dt=1.0):
        """
        Estimate the linear operator which maps `X0` to `X1`.

        :param numpy.ndarray X0: matrix containing the snapshots x0,..x{n-1}
            by column.
        :param numpy.ndarray X1: matrix containing the snapshots x1,..x{n}
            (or the derivatives of x0,..x{n-1}) by column.
        :param numpy.ndarray U0: the control inputs, stored by column.
        :param numpy.ndarray B: the control matrix, if known. In this case
            only the state operator is estimated.
        :param str kind: `'discrete'` or `'continuous'`.
        :param float dt: the time step of the data.
        :return: the estimated operator.
        :rtype: DMDOperator
        """
        X0 = np.atleast_2d(X0)
        X1 = np.atleast_2d(X1)
        if U0 is not None:
            U0 = np.atleast_2d(U0)
            if U0.size == 0:
                U0 = None
        self._check_snapshots(X0, X1, U0)
        self._check_kind(kind)

        known_B = None
        if B is not None:
            if U0 is None:
                raise ValueError("A control matrix B requires control inputs.")
            known_B = np.atleast_2d(B)
            if known_B.shape != (X0.shape[0], U0.shape[0]):
                raise DimensionMismatch(
                    "B has shape {}, expected {}.".format(
                        known_B.shape, (X0.shape[0], U0.shape[0])
                    )
                )
            X1 = X1 - known_B.dot(U0)
            U0 = None

        K, Bhat, Q, lift = self._compute_operator(X0, X1, U0)

        if known_B is not None:
            Bhat = known_B if Q is None else Q.conj().T.dot(known_B)

        logging.info(
            "%s: operator of rank %d (requested %s) from %d samples",
            self.__class__.__name__,
            K.shape[0],
            self._svd_rank,
            X0.shape[1],
        )

        return DMDOperator(K, B=Bhat, Q=Q, kind=kind, dt=dt, lift=lift)

    def _check_kind(self, kind):
        if kind not in (DISCRETE, CONTINUOUS):
            raise ValueError("Invalid operator kind: {}".format(kind))

    def _compute_operator(self, X0, X1, U0):
        """
        Abstract method computing the operator.

        Not implemented, it has to be implemented in subclasses. It returns
        the state operator, the control operator (or None), the projection
        basis (None if no reduction took place) and the matrix lifting the
        eigenvectors to the exact modes (or None).
        """
        name = self.__class__.__name__
        msg = f"Subclass must implement abstract method {name}._compute_operator"
        raise NotImplementedError(msg)
