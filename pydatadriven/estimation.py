"""
Module for the estimation result, the immutable container of a fitted
operator.
"""
import numpy as np


def _round(X, digits):
    if digits is None:
        return X
    rounded = np.round(X, digits)
    rounded.flags.writeable = False
    return rounded


class EstimationResult:
    """
    Immutable wrapper of a :class:`~pydatadriven.dmdoperator.DMDOperator`
    recording how it was obtained.

    :param operator: the estimated operator, owned by this result.
    :type operator: pydatadriven.dmdoperator.DMDOperator
    :param str algorithm: name of the estimator which produced the operator.
    :param bool operator_only: if True, no trajectory reconstruction is
        associated with this result.
    :param int digits: if not None, the reported operator entries and
        eigenvalues are rounded to `digits` decimals.
    """

    __slots__ = ("_operator", "_algorithm", "_operator_only", "_digits")

    def __init__(self, operator, algorithm, operator_only=False, digits=None):
        object.__setattr__(self, "_operator", operator)
        object.__setattr__(self, "_algorithm", algorithm)
        object.__setattr__(self, "_operator_only", bool(operator_only))
        object.__setattr__(self, "_digits", digits)

    def __setattr__(self, name, value):
        raise AttributeError(
            "{} is immutable, cannot set {}".format(
                self.__class__.__name__, name
            )
        )

    def __delattr__(self, name):
        raise AttributeError(
            "{} is immutable, cannot delete {}".format(
                self.__class__.__name__, name
            )
        )

    def __repr__(self):
        return "{}(algorithm={!r}, kind={!r}, rank={}, n_states={})".format(
            self.__class__.__name__,
            self._algorithm,
            self.kind,
            self.rank,
            self.operator.n_states,
        )

    @property
    def operator(self):
        """
        The underlying :class:`~pydatadriven.dmdoperator.DMDOperator`.
        """
        return self._operator

    @property
    def algorithm(self):
        return self._algorithm

    @property
    def operator_only(self):
        return self._operator_only

    @property
    def digits(self):
        return self._digits

    @property
    def K(self):
        """
        The (reduced) operator.

        :rtype: numpy.ndarray
        """
        return _round(self._operator.K, self._digits)

    @property
    def B(self):
        """
        The (reduced) control matrix, empty if the system has no control
        input.

        :rtype: numpy.ndarray
        """
        return _round(self._operator.B, self._digits)

    @property
    def C(self):
        return self._operator.C

    @property
    def Q(self):
        return self._operator.Q

    @property
    def rank(self):
        """
        The effective rank used by the estimator.

        :rtype: int
        """
        return self._operator.rank

    @property
    def kind(self):
        return self._operator.kind

    @property
    def dt(self):
        return self._operator.dt

    @property
    def eigenvalues(self):
        """
        Eigenvalues of the operator, computed once and cached.

        :rtype: numpy.ndarray
        """
        return _round(self._operator.eigenvalues, self._digits)

    @property
    def eigenvectors(self):
        return self._operator.eigenvectors

    @property
    def modes(self):
        """
        The dynamic modes stored by column.

        :rtype: numpy.ndarray
        """
        return self._operator.modes

    @property
    def continuous_eigenvalues(self):
        return _round(self._operator.continuous_eigenvalues(), self._digits)

    def full_operator(self):
        """
        The operator acting on the full state space.

        :rtype: numpy.ndarray
        """
        return _round(self._operator.full_operator(), self._digits)

    def continuous_operator(self, dt=None):
        """
        The continuous-time equivalent of the operator, see
        :meth:`pydatadriven.dmdoperator.DMDOperator.continuous_operator`.

        :rtype: numpy.ndarray
        """
        return _round(self._operator.continuous_operator(dt), self._digits)
