"""
Derived module from dmdbase.py for total least squares dmd.

References:
- Hemati, M. S., Rowley, C. W., Deem, E. A., & Cattafesta, L. N. (2017).
De-biasing the dynamic mode decomposition for applied Koopman spectral
analysis of noisy datasets. Theoretical and Computational Fluid Dynamics,
31(4), 349-368.
- Dawson, S. T., Hemati, M. S., Williams, M. O., & Rowley, C. W. (2016).
Characterizing and correcting for the effect of sensor noise in the dynamic
mode decomposition. Experiments in Fluids, 57(3), 42.
"""
from .dmdbase import DMDBase
from .dmdpinv import DMDPINV
from .utils import compute_tlsq


class TOTALDMD(DMDBase):
    """
    Total least squares Dynamic Mode Decomposition.

    The snapshots (and the control inputs) are stacked and projected onto
    the leading right-singular vectors of the stacked matrix, which removes
    the noise affecting both `X0` and `X1`. The `inner` estimator is then
    applied to the denoised data.

    :param tlsq_rank: the rank of the denoising projection. `None` uses the
        number of states plus the number of control inputs; the other values follow the `svd_rank`
        conventions, and -1 or `'full'` disables the denoising. It is
        independent of the rank of the inner estimator.
    :type tlsq_rank: int or float or str
    :param inner: the estimator applied after denoising. Default is
        :class:`~pydatadriven.dmdpinv.DMDPINV`.
    :type inner: DMDBase
    """

    def __init__(self, tlsq_rank=None, inner=None):
        if inner is None:
            inner = DMDPINV()
        if not isinstance(inner, DMDBase):
            raise ValueError(
                "Expected a DMD estimator as inner algorithm, got {}".format(
                    type(inner)
                )
            )
        super().__init__(svd_rank=inner.svd_rank)
        self._tlsq_rank = tlsq_rank
        self._inner = inner

    @property
    def tlsq_rank(self):
        return self._tlsq_rank

    @property
    def inner(self):
        return self._inner

    def __repr__(self):
        return "{}(tlsq_rank={!r}, inner={!r})".format(
            self.__class__.__name__, self._tlsq_rank, self._inner
        )

    def _check_kind(self, kind):
        self._inner._check_kind(kind)

    def _compute_operator(self, X0, X1, U0):
        tlsq_rank = self._tlsq_rank
        if tlsq_rank is None:
            tlsq_rank = X0.shape[0] + (0 if U0 is None else U0.shape[0])

        if U0 is None:
            X0, X1 = compute_tlsq((X0, X1), tlsq_rank)
        else:
            X0, U0, X1 = compute_tlsq((X0, U0, X1), tlsq_rank)

        return self._inner._compute_operator(X0, X1, U0)
