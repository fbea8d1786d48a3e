"""
Module for the assembly of snapshot pairs.
"""
import logging
import warnings

import numpy as np

from .errors import DimensionMismatch, UnsupportedProblemKind

CONDITION_THRESHOLD = 10e4


class Snapshots:
    """
    Utility class which extracts the snapshot pairs used by DMD from a
    validated :class:`~pydatadriven.problem.DataDrivenProblem`.

    For discrete problems the pairs are consecutive columns of `X`; for
    continuous problems each state is paired with its time derivative. The
    matrices are copies, so the problem data is never aliased.

    :param problem: the problem to process.
    :type problem: pydatadriven.problem.DataDrivenProblem
    """

    def __init__(self, problem):
        if problem.is_direct:
            raise UnsupportedProblemKind(
                "Dynamic Mode Decomposition requires a discrete or continuous "
                "problem, got a direct one."
            )

        self._kind = problem.kind
        self._dt = problem.dt

        if problem.is_discrete:
            if problem.n_samples < 2:
                raise DimensionMismatch(
                    "Received only one time snapshot, at least two are "
                    "needed to build a snapshot pair."
                )
            self._X0 = np.array(problem.X[:, :-1])
            self._X1 = np.array(problem.X[:, 1:])
            self._t = np.array(problem.t[:-1])
            self._U0 = (
                np.array(problem.U[:, :-1]) if problem.has_control else None
            )
        else:
            if problem.DX is None:
                raise ValueError(
                    "Continuous problems require the derivatives DX to be "
                    "populated before computing DMD."
                )
            self._X0 = np.array(problem.X)
            self._X1 = np.array(problem.DX)
            self._t = np.array(problem.t)
            self._U0 = np.array(problem.U) if problem.has_control else None

        if self._X0.shape != self._X1.shape:
            raise DimensionMismatch(
                "Snapshot matrices with different shapes: {} and {}.".format(
                    self._X0.shape, self._X1.shape
                )
            )
        if self._U0 is not None and self._U0.shape[1] != self._X0.shape[1]:
            raise DimensionMismatch(
                "Expected {} control samples, got {}.".format(
                    self._X0.shape[1], self._U0.shape[1]
                )
            )

        self._x0 = np.array(problem.X[:, 0])

        Snapshots._check_condition_number(self._X0)

        logging.info(
            "Snapshots: %s, kind: %s, controls: %s",
            self._X0.shape,
            self._kind,
            0 if self._U0 is None else self._U0.shape[0],
        )

    @staticmethod
    def _check_condition_number(X):
        cond_number = np.linalg.cond(X)
        if cond_number > CONDITION_THRESHOLD:
            logging.warning("Snapshots condition number %s", cond_number)
            warnings.warn(
                f"Input data condition number {cond_number}. "
                """Consider preprocessing data, passing in augmented data
matrix, or regularization methods."""
            )

    @property
    def X0(self):
        """
        Snapshots x0, ..., x{n-1} by column.
        """
        return self._X0

    @property
    def X1(self):
        """
        Time-advanced snapshots (discrete problems) or derivatives
        (continuous problems), by column.
        """
        return self._X1

    @property
    def U0(self):
        """
        Control inputs aligned with `X0`, or None.
        """
        return self._U0

    @property
    def x0(self):
        """
        Initial condition of the problem.
        """
        return self._x0

    @property
    def t(self):
        return self._t

    @property
    def dt(self):
        return self._dt

    @property
    def kind(self):
        return self._kind

    @property
    def n_samples(self):
        return self._X0.shape[1]
