"""
Derived module from dmdbase.py for forward/backward dmd.

Reference: Dawson et al. https://arxiv.org/abs/1507.02264
"""
import logging
import warnings

import numpy as np
from scipy.linalg import sqrtm

from .dmdbase import DMDBase
from .errors import SingularOperatorWarning, UnsupportedProblemKind
from .problem import CONTINUOUS
from .utils import compute_svd, pseudo_inverse, real_if_negligible

SINGULAR_RCOND = 1e-12


def _align_with_forward(root, forward):
    """
    Flip the sign of the eigenvalues of `root` pointing away from the
    matching eigenvalues of the forward operator: both `r` and `-r` square
    to the same value, the principal branch only returns the first one.

    :param numpy.ndarray root: the principal square root.
    :param numpy.ndarray forward: the forward operator.
    :rtype: numpy.ndarray
    """
    if not np.all(np.isfinite(root)):
        return root

    eigs, W = np.linalg.eig(root)
    if 1.0 / np.linalg.cond(W) < SINGULAR_RCOND:
        return root
    W_inv = np.linalg.inv(W)

    forward_eigs = np.diag(np.linalg.multi_dot([W_inv, forward, W]))
    flip = (eigs * forward_eigs.conj()).real < 0
    if not np.any(flip):
        return root

    logging.info("Square root: flipping %d eigenvalues", np.sum(flip))
    eigs = np.where(flip, -eigs, eigs)
    return np.linalg.multi_dot([W, np.diag(eigs), W_inv])


class FbDMD(DMDBase):
    """
    Forward/backward DMD class.

    The forward operator (X0 -> X1) and the backward operator (X1 -> X0) are
    computed in the reduced basis given by the truncated SVD of `X0`; the
    returned operator is their geometric mean

    .. math::

        \\mathbf{K} = \\left( \\mathbf{K}_f \\mathbf{K}_b^{-1}
        \\right)^{1/2}

    which cancels the first order bias due to the measurement noise. The
    principal square root is taken, then the sign of each of its eigenvalues
    is matched with the forward operator, so that eigenvalues with negative
    real part are recovered. If the backward operator is numerically
    singular, a :class:`~pydatadriven.errors.SingularOperatorWarning` is
    emitted and its pseudo-inverse is used.

    With control inputs, the control matrix is estimated by the forward
    least squares problem on `[X0; U0]` and its contribution is removed from
    `X1` before the forward/backward averaging.

    Only discrete problems are supported.

    :param svd_rank: the rank for the truncation; if -1, `None` or `'full'`,
        the method does not compute truncation; if 0, the method computes the
        optimal rank and uses it for truncation; if positive interger, the
        method uses the argument for the truncation; if float between 0 and
        1, the rank is the number of the biggest singular values that are
        needed to reach the 'energy' specified by `svd_rank`.
    :type svd_rank: int or float or str
    """

    def _check_kind(self, kind):
        if kind == CONTINUOUS:
            raise UnsupportedProblemKind(
                "Forward/backward DMD requires a discrete problem."
            )
        super()._check_kind(kind)

    def _compute_operator(self, X0, X1, U0):
        n_states = X0.shape[0]

        B = None
        if U0 is not None:
            omega = np.concatenate((X0, U0), axis=0)
            G = X1.dot(pseudo_inverse(omega))
            _, B = self._split_control(G, n_states)
            X1 = X1 - B.dot(U0)

        U, s, V = compute_svd(X0, self._svd_rank)
        forward = np.linalg.multi_dot([U.T.conj(), X1, V]) * np.reciprocal(s)

        # b stands for "backward"
        X0r = U.T.conj().dot(X0)
        X1r = U.T.conj().dot(X1)
        bU, bs, bV = compute_svd(X1r, svd_rank=-1)
        atilde_back = np.linalg.multi_dot(
            [X0r, bV * np.reciprocal(bs), bU.T.conj()]
        )

        rcond = 1.0 / np.linalg.cond(atilde_back)
        if not np.isfinite(rcond) or rcond < SINGULAR_RCOND:
            logging.warning(
                "Backward operator is singular (rcond %s), using pinv", rcond
            )
            warnings.warn(
                "The backward operator is singular (reciprocal condition "
                "number {}), its pseudo-inverse is used.".format(rcond),
                SingularOperatorWarning,
            )
            inv_back = pseudo_inverse(atilde_back)
        else:
            inv_back = np.linalg.inv(atilde_back)

        atilde = _align_with_forward(sqrtm(forward.dot(inv_back)), forward)
        if not np.iscomplexobj(X0) and not np.iscomplexobj(X1):
            atilde = real_if_negligible(atilde)

        if len(s) == n_states:
            K = np.linalg.multi_dot([U, atilde, U.T.conj()])
            return K, B, None, None

        lift = X1.dot(V) * np.reciprocal(s)
        if B is not None:
            B = U.T.conj().dot(B)
        return atilde, B, U, lift
