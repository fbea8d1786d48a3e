"""
Errors and numerical warnings raised while estimating linear operators.
"""


class DimensionMismatch(ValueError):
    """
    Raised when snapshot, derivative or control matrices have incompatible
    shapes.
    """


class UnsupportedProblemKind(ValueError):
    """
    Raised when a problem kind cannot be handled by Dynamic Mode
    Decomposition (e.g. direct problems, which have no causal relationship
    between the columns of the data).
    """


class NonPositiveTimeStep(ValueError):
    """
    Raised when a discrete operator is converted to continuous time with a
    time step lower or equal than zero.
    """


class SingularOperatorWarning(RuntimeWarning):
    """
    Emitted when the backward operator of forward/backward DMD cannot be
    inverted; the pseudo-inverse is used instead.
    """


class BranchCutWarning(RuntimeWarning):
    """
    Emitted when an eigenvalue lies on the negative real axis, where the
    complex logarithm is ambiguous.
    """
