"""
Accuracy diagnostics of a reconstructed trajectory.
"""
import logging

import numpy as np


def compute_metrics(X, X_hat):
    """
    Compare the measured states `X` with the reconstruction `X_hat`.

    The returned dictionary contains:

    ================  ========================================================
    Key               Value
    ================  ========================================================
    `L1`              per-state L1 norm of the residual.
    `L2`              per-state L2 norm of the residual.
    `L2_total`        aggregate L2 (Frobenius) norm of the residual.
    `RSS`             residual sum of squares.
    `MSE`             mean squared error over all the entries.
    `sample_error`    L2 norm of the residual of each sample.
    `max_error`       largest absolute entry of the residual.
    `R2`              per-state coefficient of determination.
    ================  ========================================================

    :param numpy.ndarray X: the measured states, stored by column.
    :param numpy.ndarray X_hat: the reconstructed states, stored by column.
    :return: the metrics.
    :rtype: dict
    """
    X = np.atleast_2d(X)
    X_hat = np.atleast_2d(X_hat)
    if X.shape != X_hat.shape:
        raise ValueError(
            "Expected reconstruction of shape {}, got {}".format(
                X.shape, X_hat.shape
            )
        )

    residual = X - X_hat
    squared = np.abs(residual) ** 2
    rss = float(np.sum(squared))

    rss_per_state = np.sum(squared, axis=1)
    tss_per_state = np.sum(
        np.abs(X - X.mean(axis=1, keepdims=True)) ** 2, axis=1
    )
    r2 = np.ones(X.shape[0])
    np.subtract(
        1.0,
        rss_per_state / np.where(tss_per_state > 0, tss_per_state, 1.0),
        out=r2,
        where=tss_per_state > 0,
    )
    r2[(tss_per_state == 0) & (rss_per_state > 0)] = 0.0

    metrics = {
        "L1": np.sum(np.abs(residual), axis=1),
        "L2": np.sqrt(rss_per_state),
        "L2_total": np.sqrt(rss),
        "RSS": rss,
        "MSE": rss / residual.size,
        "sample_error": np.linalg.norm(residual, axis=0),
        "max_error": float(np.max(np.abs(residual))),
        "R2": r2,
    }

    logging.info(
        "Reconstruction error: L2 %s, MSE %s", metrics["L2_total"],
        metrics["MSE"]
    )
    return metrics
