"""
Module for the solution of a data-driven problem and the `solve` entry
point.
"""
import numpy as np

from .diagnostics import compute_metrics
from .dmdbase import DMDBase
from .estimation import EstimationResult
from .snapshots import Snapshots
from .system import LinearSystem
from .utils import real_if_negligible


def _read_only(X):
    X = np.array(X)
    X.flags.writeable = False
    return X


class DataDrivenSolution:
    """
    Immutable solution of a data-driven problem: the estimation result, the
    linear system it defines, the reconstructed trajectory and the accuracy
    metrics.

    :param problem: the solved problem.
    :type problem: pydatadriven.problem.DataDrivenProblem
    :param estimation: the estimation result.
    :type estimation: pydatadriven.estimation.EstimationResult
    :param system: the estimated system.
    :type system: pydatadriven.system.LinearSystem
    :param numpy.ndarray predicted: the reconstructed trajectory.
    :param dict metrics: the accuracy metrics.
    """

    __slots__ = (
        "_problem",
        "_estimation",
        "_system",
        "_predicted",
        "_metrics",
        "_retcode",
    )

    def __init__(self, problem, estimation, system, predicted, metrics,
                 retcode="success"):
        predicted = _read_only(predicted)
        metrics = {
            key: _read_only(value) if isinstance(value, np.ndarray) else value
            for key, value in metrics.items()
        }

        object.__setattr__(self, "_problem", problem)
        object.__setattr__(self, "_estimation", estimation)
        object.__setattr__(self, "_system", system)
        object.__setattr__(self, "_predicted", predicted)
        object.__setattr__(self, "_metrics", metrics)
        object.__setattr__(self, "_retcode", retcode)

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
        return "{}(algorithm={!r}, retcode={!r}, L2={})".format(
            self.__class__.__name__,
            self._estimation.algorithm,
            self._retcode,
            self._metrics["L2_total"],
        )

    @property
    def problem(self):
        return self._problem

    @property
    def estimation(self):
        return self._estimation

    @property
    def system(self):
        return self._system

    @property
    def predicted(self):
        """
        The trajectory reconstructed from the initial condition of the
        problem, stored by column.

        :rtype: numpy.ndarray
        """
        return self._predicted

    @property
    def retcode(self):
        return self._retcode

    def result(self):
        """
        The estimated operator acting on the full state space.

        :rtype: numpy.ndarray
        """
        return self._estimation.full_operator()

    def metrics(self):
        """
        A copy of the accuracy metrics (the arrays it holds are read-only),
        see :func:`pydatadriven.diagnostics.compute_metrics`.

        :rtype: dict
        """
        return dict(self._metrics)

    def parameters(self):
        """
        The estimated coefficients: the entries of `K` followed by those of
        `B`, in row-major order.

        :rtype: numpy.ndarray
        """
        return np.concatenate(
            (self._estimation.K.ravel(), self._estimation.B.ravel())
        )

    def problem_parameters(self):
        """
        The known parameters of the problem, if any.

        :rtype: numpy.ndarray
        """
        return self._problem.p


def solve(problem, algorithm, operator_only=False, digits=None,
          eval_expression=False, B=None):
    """
    Estimate the linear operator underlying `problem` with `algorithm`.

    :param problem: a discrete or continuous problem.
    :type problem: pydatadriven.problem.DataDrivenProblem
    :param algorithm: the DMD estimator.
    :type algorithm: pydatadriven.dmdbase.DMDBase
    :param bool operator_only: if True, only the operator is estimated and
        the :class:`~pydatadriven.estimation.EstimationResult` is returned, no
        trajectory is reconstructed.
    :param int digits: if not None, the reported operator and eigenvalues
        are rounded to `digits` decimals.
    :param bool eval_expression: accepted for uniformity with symbolic
        solvers, ignored.
    :param numpy.ndarray B: the control matrix, if known.
    :return: the solution, or the estimation result if `operator_only`.
    :rtype: DataDrivenSolution or EstimationResult
    """
    if not isinstance(algorithm, DMDBase):
        raise ValueError(
            "Expected a DMD estimator, got {}".format(type(algorithm))
        )

    snapshots = Snapshots(problem)
    operator = algorithm.estimate(
        snapshots.X0,
        snapshots.X1,
        snapshots.U0,
        B=B,
        kind=snapshots.kind,
        dt=snapshots.dt,
    )
    estimation = EstimationResult(
        operator,
        algorithm.__class__.__name__,
        operator_only=operator_only,
        digits=digits,
    )
    if operator_only:
        return estimation

    system = LinearSystem(operator)
    predicted = system.simulate(snapshots.x0, problem.t, problem.U)
    if not np.iscomplexobj(problem.X):
        predicted = real_if_negligible(predicted, tol=1e-8)

    return DataDrivenSolution(
        problem,
        estimation,
        system,
        predicted,
        compute_metrics(problem.X, predicted),
    )


def result(solution):
    """
    The estimated operator of `solution`, see
    :meth:`DataDrivenSolution.result`.
    """
    return solution.result()


def metrics(solution):
    """
    The accuracy metrics of `solution`, see
    :meth:`DataDrivenSolution.metrics`.
    """
    return solution.metrics()
