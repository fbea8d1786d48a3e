"""
Module for the functional representation of an estimated linear system.
"""
import numpy as np
from scipy.linalg import expm

from .problem import CONTINUOUS, DISCRETE


class LinearSystem:
    """
    Linear system defined by a :class:`~pydatadriven.dmdoperator.DMDOperator`.

    Calling the system on a full state `x` (and optionally a control input
    `u`) returns the next state for discrete operators, the time derivative
    for continuous ones:

    .. math::

        f(\\mathbf{x}, \\mathbf{u}) =
        \\mathbf{C} (\\mathbf{K} \\mathbf{Q}^* \\mathbf{x} + \\mathbf{B}
        \\mathbf{u})

    :param operator: the estimated operator.
    :type operator: pydatadriven.dmdoperator.DMDOperator
    """

    def __init__(self, operator):
        self._operator = operator

    @property
    def kind(self):
        return self._operator.kind

    @property
    def is_discrete(self):
        return self._operator.kind == DISCRETE

    @property
    def is_continuous(self):
        return self._operator.kind == CONTINUOUS

    def __call__(self, x, u=None):
        z = self._operator.to_reduced(x)
        return self._operator.to_full(self._operator(z, u))

    def simulate(self, x0, t, U=None):
        """
        Reconstruct the trajectory starting from `x0`.

        Discrete systems are iterated once per time stamp; continuous systems
        are propagated exactly between consecutive time stamps, holding the
        control input constant over each interval.

        :param numpy.ndarray x0: the initial (full) state.
        :param numpy.ndarray t: the time stamps of the trajectory.
        :param numpy.ndarray U: the control inputs, stored by column, at
            least one per interval.
        :return: the trajectory, stored by column.
        :rtype: numpy.ndarray
        """
        t = np.asarray(t, dtype=float).ravel()
        operator = self._operator

        if operator.n_controls and U is None:
            raise ValueError("The system requires control inputs.")
        if U is not None:
            U = np.atleast_2d(U)
            if U.shape[1] < t.size - 1:
                raise ValueError(
                    "Expected at least {} control inputs, got {}".format(
                        t.size - 1, U.shape[1]
                    )
                )

        z = operator.to_reduced(np.asarray(x0))
        Z = np.empty((z.shape[0], t.size), dtype=np.result_type(z, operator.K))
        Z[:, 0] = z

        if self.is_discrete:
            for i in range(1, t.size):
                u = None if U is None else U[:, i - 1]
                Z[:, i] = operator(Z[:, i - 1], u)
        else:
            self._propagate_continuous(Z, t, U)

        return operator.to_full(Z)

    def _propagate_continuous(self, Z, t, U):
        operator = self._operator
        rank = operator.rank
        n_controls = operator.n_controls if U is not None else 0

        # zero order hold: expm([[K, B], [0, 0]] dt) = [[Ad, Bd], [0, I]]
        augmented = np.zeros(
            (rank + n_controls, rank + n_controls),
            dtype=np.result_type(operator.K, operator.B),
        )
        augmented[:rank, :rank] = operator.K
        if n_controls:
            augmented[:rank, rank:] = operator.B

        transitions = {}
        for i, dt in enumerate(np.diff(t), start=1):
            key = round(dt, 12)
            if key not in transitions:
                transitions[key] = expm(augmented * dt)
            Phi = transitions[key]

            Z[:, i] = Phi[:rank, :rank].dot(Z[:, i - 1])
            if n_controls:
                Z[:, i] += Phi[:rank, rank:].dot(U[:, i - 1])
