"""
Derived module from dmdbase.py for the svd-truncated dmd.
"""
import numpy as np

from .dmdbase import DMDBase
from .utils import compute_svd


class DMDSVD(DMDBase):
    """
    Dynamic Mode Decomposition computed through the truncated singular value
    decomposition of the snapshots, `X0 = U S V^*`.

    The reduced operator is

    .. math::

        \\mathbf{\\tilde{K}} =
        \\mathbf{U}^* \\mathbf{X_1} \\mathbf{V} \\mathbf{S}^{-1}

    If the retained rank equals the number of states the operator is lifted
    to the full space (`K = U Ktilde U^*`, `Q = C = I`), otherwise `Q = U`
    and the exact DMD modes are `X1 V S^-1 W`.

    With control inputs the SVD of the augmented matrix `[X0; U0]` is used,
    truncated according to `svd_rank_omega`, and the reduced basis is given
    by the left-singular vectors of `X1` (reference: Proctor, Brunton and
    Kutz, Dynamic mode decomposition with control, 2016).

    :param svd_rank: the rank for the truncation; if -1, `None` or `'full'`,
        the method does not compute truncation; if 0, the method computes the
        optimal rank and uses it for truncation; if positive interger, the
        method uses the argument for the truncation; if float between 0 and
        1, the rank is the number of the biggest singular values that are
        needed to reach the 'energy' specified by `svd_rank`.
    :type svd_rank: int or float or str
    :param svd_rank_omega: the rank for the truncation of the augmented
        matrix composed by the snapshots and the control inputs. Used only
        when control inputs are available. Default is -1 (no truncation).
    :type svd_rank_omega: int or float or str
    """

    def __init__(self, svd_rank=-1, svd_rank_omega=-1):
        super().__init__(svd_rank=svd_rank)
        self._svd_rank_omega = svd_rank_omega

    @property
    def svd_rank_omega(self):
        return self._svd_rank_omega

    def _compute_operator(self, X0, X1, U0):
        if U0 is None:
            return self._compute_autonomous_operator(X0, X1)
        return self._compute_controlled_operator(X0, X1, U0)

    def _compute_autonomous_operator(self, X0, X1):
        n_states = X0.shape[0]
        U, s, V = compute_svd(X0, self._svd_rank)

        lift = X1.dot(V) * np.reciprocal(s)
        atilde = U.T.conj().dot(lift)

        if len(s) == n_states:
            K = np.linalg.multi_dot([U, atilde, U.T.conj()])
            return K, None, None, None
        return atilde, None, U, lift

    def _compute_controlled_operator(self, X0, X1, U0):
        n_states = X0.shape[0]
        omega = np.concatenate((X0, U0), axis=0)

        Up, sp, Vp = compute_svd(omega, self._svd_rank_omega)
        Up1 = Up[:n_states, :]
        Up2 = Up[n_states:, :]
        G = X1.dot(Vp) * np.reciprocal(sp)

        Ur, _, _ = compute_svd(X1, self._svd_rank)

        if Ur.shape[1] == n_states:
            return G.dot(Up1.T.conj()), G.dot(Up2.T.conj()), None, None

        lift = np.linalg.multi_dot([G, Up1.T.conj(), Ur])
        K = Ur.T.conj().dot(lift)
        B = np.linalg.multi_dot([Ur.T.conj(), G, Up2.T.conj()])
        return K, B, Ur, lift
