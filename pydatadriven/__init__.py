"""
PyDataDriven init
"""
__all__ = [
    "errors",
    "problem",
    "snapshots",
    "dmdoperator",
    "dmdbase",
    "dmdpinv",
    "dmdsvd",
    "totaldmd",
    "fbdmd",
    "estimation",
    "system",
    "diagnostics",
    "solution",
]


from .diagnostics import compute_metrics
from .dmdbase import DMDBase
from .dmdoperator import DMDOperator
from .dmdpinv import DMDPINV
from .dmdsvd import DMDSVD
from .errors import (
    BranchCutWarning,
    DimensionMismatch,
    NonPositiveTimeStep,
    SingularOperatorWarning,
    UnsupportedProblemKind,
)
from .estimation import EstimationResult
from .fbdmd import FbDMD
from .meta import *
from .problem import DataDrivenProblem
from .snapshots import Snapshots
from .solution import DataDrivenSolution, metrics, result, solve
from .system import LinearSystem
from .totaldmd import TOTALDMD
