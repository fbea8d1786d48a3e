"""
Derived module from dmdbase.py for the pseudo-inverse dmd.
"""
import logging

import numpy as np

from .dmdbase import DMDBase
from .utils import is_full_rank_request, pseudo_inverse


class DMDPINV(DMDBase):
    """
    Dynamic Mode Decomposition computed through the Moore-Penrose
    pseudo-inverse, `K = X1 pinv(X0)`.

    The operator is always computed in the full state space: a truncation
    requested through `svd_rank` is accepted for interface uniformity and
    ignored.

    :param svd_rank: ignored.
    :type svd_rank: int or float or str
    """

    def __init__(self, svd_rank=-1):
        super().__init__(svd_rank=svd_rank)
        if not is_full_rank_request(svd_rank):
            logging.info("DMDPINV ignores the truncation svd_rank=%s", svd_rank)

    def _compute_operator(self, X0, X1, U0):
        n_states = X0.shape[0]
        omega = X0 if U0 is None else np.concatenate((X0, U0), axis=0)

        G = X1.dot(pseudo_inverse(omega))
        K, B = self._split_control(G, n_states)

        return K, (B if U0 is not None else None), None, None
