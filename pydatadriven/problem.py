"""
Module for the description of data-driven problems.

A problem collects the measured states ``X`` (stored by column), the time
stamps ``t``, the time derivatives ``DX``, the control inputs ``U`` and the
known parameters ``p`` of a system, and tags them with the kind of
relationship linking consecutive columns.
"""
import numpy as np

from .errors import DimensionMismatch, UnsupportedProblemKind

DISCRETE = "discrete"
CONTINUOUS = "continuous"
DIRECT = "direct"

PROBLEM_KINDS = (DISCRETE, CONTINUOUS, DIRECT)


def _as_matrix(X, name):
    """
    Copy `X` into a 2D floating point (or complex) array. A 1D array is
    interpreted as the time series of a single state.
    """
    arr = np.array(X)
    if arr.dtype.kind not in "fc":
        arr = arr.astype(float)

    if arr.ndim == 1:
        arr = arr[None, :]
    if arr.ndim != 2:
        raise DimensionMismatch(
            "Expected a 2D matrix (states x samples) for {}, got {} "
            "dimensions.".format(name, arr.ndim)
        )
    return arr


class DataDrivenProblem:
    """
    Validated container for the data of a system identification problem.

    The arrays passed to the constructor are copied, hence modifying them
    afterwards does not affect the problem.

    :param X: the measured states, stored by column.
    :type X: numpy.ndarray or iterable
    :param t: the time stamps of the samples. For discrete problems the
        default is `0, 1, ..., n_samples - 1`.
    :type t: numpy.ndarray or iterable
    :param DX: the time derivatives of the states (continuous problems).
    :type DX: numpy.ndarray or iterable
    :param U: the control inputs, stored by column.
    :type U: numpy.ndarray or iterable
    :param p: the known parameters of the system.
    :type p: numpy.ndarray or iterable
    :param str kind: one of `'discrete'`, `'continuous'` or `'direct'`.
    :param Y: the observed outputs of a direct problem.
    :type Y: numpy.ndarray or iterable
    """

    def __init__(self, X, t=None, DX=None, U=None, p=None, kind=DISCRETE,
                 Y=None):
        if kind not in PROBLEM_KINDS:
            raise UnsupportedProblemKind(
                "Invalid problem kind: {}. Expected one of {}.".format(
                    kind, PROBLEM_KINDS
                )
            )
        self._kind = kind

        self._X = _as_matrix(X, "X")
        n_samples = self._X.shape[1]

        if t is None:
            if kind == CONTINUOUS:
                raise ValueError(
                    "A continuous problem requires the time stamps `t`."
                )
            t = np.arange(n_samples, dtype=float)
        self._t = np.array(t, dtype=float).ravel()
        if self._t.size != n_samples:
            raise DimensionMismatch(
                "Expected {} time stamps, got {}.".format(
                    n_samples, self._t.size
                )
            )
        if np.any(np.diff(self._t) <= 0):
            raise ValueError("The time stamps must be strictly increasing.")

        self._DX = None
        if DX is not None:
            self._DX = _as_matrix(DX, "DX")
            if self._DX.shape != self._X.shape:
                raise DimensionMismatch(
                    "DX has shape {}, expected {}.".format(
                        self._DX.shape, self._X.shape
                    )
                )

        self._U = None
        if U is not None:
            self._U = _as_matrix(U, "U")
            if self._U.shape[1] != n_samples:
                raise DimensionMismatch(
                    "U has {} samples, expected {}.".format(
                        self._U.shape[1], n_samples
                    )
                )

        self._Y = None
        if Y is not None:
            self._Y = _as_matrix(Y, "Y")
            if self._Y.shape[1] != n_samples:
                raise DimensionMismatch(
                    "Y has {} samples, expected {}.".format(
                        self._Y.shape[1], n_samples
                    )
                )

        self._p = None if p is None else np.array(p).ravel()

    @classmethod
    def discrete(cls, X, t=None, U=None, p=None):
        """
        Problem whose column `i + 1` is the time-advanced state of column `i`.
        """
        return cls(X, t=t, U=U, p=p, kind=DISCRETE)

    @classmethod
    def continuous(cls, X, t, DX, U=None, p=None):
        """
        Problem whose derivatives `DX` are known at every sample of `X`.
        """
        return cls(X, t=t, DX=DX, U=U, p=p, kind=CONTINUOUS)

    @classmethod
    def direct(cls, X, Y, U=None, p=None):
        """
        Problem mapping the inputs `X` to the outputs `Y` without any time
        relationship.
        """
        return cls(X, U=U, p=p, kind=DIRECT, Y=Y)

    @classmethod
    def from_ivp(cls, solution, fun, U=None, p=None, args=()):
        """
        Build a continuous problem from the output of
        :func:`scipy.integrate.solve_ivp`. The derivatives are obtained by
        evaluating the known right-hand side `fun` at the saved samples.

        :param solution: the object returned by `solve_ivp`.
        :param callable fun: the right-hand side, called as
            `fun(t, x, *args)`.
        :param tuple args: additional arguments passed to `fun`.
        :return: the continuous problem.
        :rtype: DataDrivenProblem
        """
        t = np.asarray(solution.t)
        X = np.asarray(solution.y)
        DX = np.column_stack(
            [np.asarray(fun(ti, xi, *args)) for ti, xi in zip(t, X.T)]
        )
        return cls.continuous(X, t, DX, U=U, p=p)

    @property
    def kind(self):
        return self._kind

    @property
    def X(self):
        return self._X

    @property
    def t(self):
        return self._t

    @property
    def DX(self):
        return self._DX

    @property
    def U(self):
        return self._U

    @property
    def Y(self):
        return self._Y

    @property
    def p(self):
        return self._p

    @property
    def n_states(self):
        return self._X.shape[0]

    @property
    def n_samples(self):
        return self._X.shape[1]

    @property
    def dt(self):
        """
        Mean sampling interval of the problem (1 if only one sample is
        available).
        """
        if self._t.size < 2:
            return 1.0
        return float(np.mean(np.diff(self._t)))

    @property
    def is_discrete(self):
        return self._kind == DISCRETE

    @property
    def is_continuous(self):
        return self._kind == CONTINUOUS

    @property
    def is_direct(self):
        return self._kind == DIRECT

    @property
    def has_control(self):
        return self._U is not None and self._U.size > 0

    def __len__(self):
        return self.n_samples

    def __repr__(self):
        return "{}(kind={!r}, n_states={}, n_samples={})".format(
            self.__class__.__name__, self._kind, self.n_states, self.n_samples
        )
