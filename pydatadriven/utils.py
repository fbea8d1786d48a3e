"""Utilities module."""

import logging
import warnings
from numbers import Number
from typing import Sequence, Tuple

import numpy as np
from scipy.linalg import pinv


def _svht(sigma_svd: np.ndarray, rows: int, cols: int) -> int:
    """
    Singular Value Hard Threshold.

    :param sigma_svd: Singual values computed by SVD
    :type sigma_svd: np.ndarray
    :param rows: Number of rows of original data matrix.
    :type rows: int
    :param cols: Number of columns of original data matrix.
    :type cols: int
    :return: Computed rank.
    :rtype: int

    References:
    Gavish, Matan, and David L. Donoho, The optimal hard threshold for
    singular values is, IEEE Transactions on Information Theory 60.8
    (2014): 5040-5053.
    https://ieeexplore.ieee.org/document/6846297
    """
    beta = np.divide(*sorted((rows, cols)))
    omega = 0.56 * beta**3 - 0.95 * beta**2 + 1.82 * beta + 1.43
    tau = np.median(sigma_svd) * omega
    rank = int(np.sum(sigma_svd > tau))

    if rank == 0:
        warnings.warn(
            "SVD optimal rank is 0. The largest singular values are "
            "indistinguishable from noise. Setting rank truncation to 1.",
            RuntimeWarning,
        )
        rank = 1

    return rank


def is_full_rank_request(svd_rank) -> bool:
    """
    Check whether `svd_rank` asks for no truncation at all.

    :param svd_rank: the requested rank.
    :rtype: bool
    """
    if svd_rank is None:
        return True
    if isinstance(svd_rank, str):
        if svd_rank != "full":
            raise ValueError(
                "Invalid value for svd_rank: {}".format(svd_rank)
            )
        return True
    return svd_rank == -1


def _compute_rank(
    sigma_svd: np.ndarray, rows: int, cols: int, svd_rank
) -> int:
    """
    Rank computation for the truncated Singular Value Decomposition.

    :param sigma_svd: 1D singular values of SVD.
    :type sigma_svd: np.ndarray
    :param rows: Number of rows of original matrix.
    :type rows: int
    :param cols: Number of columns of original matrix.
    :type cols: int
    :param svd_rank: the rank for the truncation; if `-1`, `None` or
        `'full'`, the method does not compute truncation; if 0, the method
        computes the optimal rank and uses it for truncation; if positive
        interger, the method uses the argument for the truncation (clamped to
        the number of singular values); if float between 0 and 1, the rank is
        the number of the biggest singular values that are needed to reach
        the 'energy' specified by `svd_rank`.
    :type svd_rank: int or float or str
    :return: the computed rank truncation.
    :rtype: int

    References:
    Gavish, Matan, and David L. Donoho, The optimal hard threshold for
    singular values is, IEEE Transactions on Information Theory 60.8
    (2014): 5040-5053.
    """
    if is_full_rank_request(svd_rank):
        rank = min(rows, cols)
    elif not isinstance(svd_rank, Number) or isinstance(svd_rank, bool):
        raise ValueError(
            "Invalid value for svd_rank: {} of type {}".format(
                svd_rank, type(svd_rank)
            )
        )
    elif svd_rank == 0:
        rank = _svht(sigma_svd, rows, cols)
    elif 0 < svd_rank < 1:
        energy = sigma_svd**2
        if energy.sum() == 0:
            return 1
        cumulative_energy = np.cumsum(energy / energy.sum())
        rank = int(np.searchsorted(cumulative_energy, svd_rank)) + 1
    elif svd_rank >= 1 and float(svd_rank).is_integer():
        rank = int(svd_rank)
    else:
        raise ValueError("Invalid value for svd_rank: {}".format(svd_rank))

    return max(1, min(rank, sigma_svd.size))


def compute_rank(X: np.ndarray, svd_rank=0) -> int:
    """
    Rank computation for the truncated Singular Value Decomposition.

    :param X: the matrix to decompose.
    :type X: np.ndarray
    :param svd_rank: the rank for the truncation, see
        :func:`_compute_rank`.
    :type svd_rank: int or float or str
    :return: the computed rank truncation.
    :rtype: int
    """
    _, s, _ = np.linalg.svd(X, full_matrices=False)
    return _compute_rank(s, X.shape[0], X.shape[1], svd_rank)


def compute_svd(
    X: np.ndarray, svd_rank=-1
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Truncated Singular Value Decomposition.

    :param X: the matrix to decompose.
    :type X: np.ndarray
    :param svd_rank: the rank for the truncation, see
        :func:`_compute_rank`. Default is -1 (no truncation).
    :type svd_rank: int or float or str
    :return: the truncated left-singular vectors matrix, the truncated
        singular values array, the truncated right-singular vectors matrix
        (stored by column).
    :rtype: Tuple[np.ndarray, np.ndarray, np.ndarray]
    """
    U, s, V = np.linalg.svd(X, full_matrices=False)
    rank = _compute_rank(s, X.shape[0], X.shape[1], svd_rank)
    V = V.conj().T

    U = U[:, :rank]
    V = V[:, :rank]
    s = s[:rank]

    if s[0] == 0:
        raise ValueError("Cannot decompose an identically zero matrix.")

    # singular values at round-off level would blow up Sigma^-1
    nonzero = s > np.finfo(float).eps * max(X.shape) * s[0]
    if not np.all(nonzero):
        logging.warning(
            "Dropping %d numerically zero singular values", np.sum(~nonzero)
        )
        warnings.warn(
            "The requested rank {} exceeds the numerical rank {} of the "
            "data, the truncation is reduced accordingly.".format(
                rank, int(np.sum(nonzero))
            ),
            RuntimeWarning,
        )
        U, s, V = U[:, nonzero], s[nonzero], V[:, nonzero]

    return U, s, V


def compute_tlsq(
    matrices: Sequence[np.ndarray], tlsq_rank=-1
) -> Tuple[np.ndarray, ...]:
    """
    Compute Total Least Square.

    The matrices are stacked by row, the leading right-singular vectors of
    the stacked matrix define a projector which is applied to every matrix.

    :param matrices: the matrices to denoise, sharing the number of columns.
    :type matrices: Sequence[np.ndarray]
    :param tlsq_rank: the rank for the truncation (see
        :func:`_compute_rank`); if `-1`, `None` or `'full'` the method does
        not compute any noise reduction.
    :type tlsq_rank: int or float or str
    :return: the denoised matrices, in the same order.
    :rtype: Tuple[np.ndarray, ...]

    References:
    https://arxiv.org/pdf/1703.11004.pdf
    https://arxiv.org/pdf/1502.03854.pdf
    """
    # Do not perform tlsq
    if is_full_rank_request(tlsq_rank):
        return tuple(matrices)

    stacked = np.concatenate(matrices, axis=0)
    _, s, V = np.linalg.svd(stacked, full_matrices=False)
    rank = _compute_rank(s, stacked.shape[0], stacked.shape[1], tlsq_rank)
    VV = V[:rank, :].conj().T.dot(V[:rank, :])

    logging.info("Total least squares projection rank: %d", rank)

    return tuple(M.dot(VV) for M in matrices)


def real_if_negligible(X: np.ndarray, tol: float = 1e-10) -> np.ndarray:
    """
    Drop the imaginary part of `X` if it only contains round-off.

    :param X: the array to check.
    :type X: np.ndarray
    :param float tol: tolerance relative to the largest entry of `X`.
    :rtype: np.ndarray
    """
    if not np.iscomplexobj(X) or X.size == 0:
        return X
    scale = max(1.0, np.max(np.abs(X)))
    if np.max(np.abs(X.imag)) <= tol * scale:
        return X.real
    return X


def pseudo_inverse(X: np.ndarray) -> np.ndarray:
    """
    Moore-Penrose pseudo-inverse, with singular values below
    `max(X.shape) * eps * max(s)` discarded.

    :param X: the matrix to invert.
    :type X: np.ndarray
    :rtype: np.ndarray
    """
    return pinv(X)
