"""
Module for plotting estimated operators.
"""
import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np

from .estimation import EstimationResult
from .problem import CONTINUOUS
from .solution import DataDrivenSolution

mpl.rcParams["figure.max_open_warning"] = 0


def _enforce_ratio(goal_ratio, supx, infx, supy, infy):
    """
    Computes the right value of `supx,infx,supy,infy` to obtain the desired
    ratio in :func:`plot_eigs`. Ratio is defined as
    ::
        dx = supx - infx
        dy = supy - infy
        max(dx,dy) / min(dx,dy)

    :param float goal_ratio: the desired ratio.
    :param float supx: the old value of `supx`, to be adjusted.
    :param float infx: the old value of `infx`, to be adjusted.
    :param float supy: the old value of `supy`, to be adjusted.
    :param float infy: the old value of `infy`, to be adjusted.
    :return tuple: a tuple which contains the updated values of
        `supx,infx,supy,infy` in this order.
    """

    dx = supx - infx
    if dx == 0:
        dx = 1.0e-16
    dy = supy - infy
    if dy == 0:
        dy = 1.0e-16
    ratio = max(dx, dy) / min(dx, dy)

    if ratio >= goal_ratio:
        if dx < dy:
            goal_size = dy / goal_ratio

            supx += (goal_size - dx) / 2
            infx -= (goal_size - dx) / 2
        elif dy < dx:
            goal_size = dx / goal_ratio

            supy += (goal_size - dy) / 2
            infy -= (goal_size - dy) / 2

    return (supx, infx, supy, infy)


def _plot_limits(eigs, narrow_view):
    if narrow_view:
        supx = max(eigs.real) + 0.05
        infx = min(eigs.real) - 0.05

        supy = max(eigs.imag) + 0.05
        infy = min(eigs.imag) - 0.05

        return _enforce_ratio(8, supx, infx, supy, infy)
    return max(np.max(np.ceil(np.absolute(eigs))), 1.0)


def _estimation(obj):
    if isinstance(obj, DataDrivenSolution):
        return obj.estimation
    if isinstance(obj, EstimationResult):
        return obj
    raise ValueError(
        "Expected a DataDrivenSolution or an EstimationResult, got {}".format(
            type(obj)
        )
    )


def plot_eigs(
    obj,
    show_axes=True,
    show_unit_circle=None,
    figsize=(8, 8),
    title="",
    narrow_view=False,
    dpi=None,
    filename=None,
):
    """
    Plot the eigenvalues of an estimated operator.

    :param obj: the solution or the estimation result.
    :type obj: DataDrivenSolution or EstimationResult
    :param bool show_axes: if True, the axes will be showed in the plot.
        Default is True.
    :param bool show_unit_circle: if True, the circle with unitary radius
        and center in the origin will be showed. Default is True for
        discrete operators, False for continuous ones.
    :param tuple(int,int) figsize: tuple in inches defining the figure
        size. Default is (8, 8).
    :param str title: title of the plot.
    :param narrow_view bool: if True, the plot will show only the smallest
        rectangular area which contains all the eigenvalues, with a padding
        of 0.05. Default is False.
    :param dpi int: If not None, the given value is passed to
        ``plt.figure``.
    :param str filename: if specified, the plot is saved at `filename`.
    """
    estimation = _estimation(obj)
    eigs = np.asarray(estimation.eigenvalues)

    if show_unit_circle is None:
        show_unit_circle = estimation.kind != CONTINUOUS

    if dpi is not None:
        plt.figure(figsize=figsize, dpi=dpi)
    else:
        plt.figure(figsize=figsize)

    plt.title(title)
    plt.gcf()
    ax = plt.gca()

    points = ax.plot(eigs.real, eigs.imag, "bo", label="Eigenvalues")[0]

    if narrow_view:
        supx, infx, supy, infy = _plot_limits(eigs, narrow_view)
        ax.set_xlim((infx, supx))
        ax.set_ylim((infy, supy))
    else:
        limit = _plot_limits(eigs, narrow_view)
        ax.set_xlim((-limit, limit))
        ax.set_ylim((-limit, limit))

        if show_axes:
            ax.annotate(
                "",
                xy=(np.max([limit * 0.8, 1.0]), 0.0),
                xytext=(np.min([-limit * 0.8, -1.0]), 0.0),
                arrowprops=dict(arrowstyle="->"),
            )
            ax.annotate(
                "",
                xy=(0.0, np.max([limit * 0.8, 1.0])),
                xytext=(0.0, np.min([-limit * 0.8, -1.0])),
                arrowprops=dict(arrowstyle="->"),
            )

    plt.ylabel("Imaginary part")
    plt.xlabel("Real part")

    handles = [points]
    labels = ["Eigenvalues"]
    if show_unit_circle:
        unit_circle = plt.Circle(
            (0.0, 0.0),
            1.0,
            color="green",
            fill=False,
            label="Unit circle",
            linestyle="--",
        )
        ax.add_artist(unit_circle)
        handles.append(unit_circle)
        labels.append("Unit circle")

    # Dashed grid
    gridlines = ax.get_xgridlines() + ax.get_ygridlines()
    for line in gridlines:
        line.set_linestyle("-.")
    ax.grid(True)

    ax.add_artist(plt.legend(handles, labels, loc="best"))
    ax.set_aspect("equal")

    if filename:
        plt.savefig(filename)
        plt.close()
    else:
        plt.show()


def plot_trajectory(solution, states=None, figsize=(8, 5), filename=None):
    """
    Plot the measured states of the problem against the trajectory
    reconstructed by the solution.

    :param solution: the solution to plot.
    :type solution: DataDrivenSolution
    :param states: indexes of the states to plot. Default is all the states.
    :type states: list(int)
    :param tuple(int,int) figsize: tuple in inches defining the figure size.
    :param str filename: if specified, the plot is saved at `filename`.
    """
    if not isinstance(solution, DataDrivenSolution):
        raise ValueError(
            "Expected a DataDrivenSolution, got {}".format(type(solution))
        )

    t = solution.problem.t
    X = solution.problem.X
    X_hat = solution.predicted
    if states is None:
        states = range(X.shape[0])

    plt.figure(figsize=figsize)
    for idx in states:
        line = plt.plot(t, X[idx].real, "o", markersize=3,
                        label="x{} data".format(idx))[0]
        plt.plot(t, X_hat[idx].real, "-", color=line.get_color(),
                 label="x{} estimate".format(idx))
    plt.xlabel("Time")
    plt.legend(loc="best")

    if filename:
        plt.savefig(filename)
        plt.close()
    else:
        plt.show()
