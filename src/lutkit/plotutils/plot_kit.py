import os
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from lutkit.accuracy import error_samples
from lutkit.plotutils.plot_style import (
    apply_plot_style, DEFAULT_LINEWIDTH, DEFAULT_COLORS
)

apply_plot_style()


class TablePlotter:
    """
    Plotting utility for inspecting how a lookup table was sampled.

    Parameters
    ----------
    table : LookupTable
        The table to plot.
    reference_fn : callable, optional
        Exact function used for error plots. Defaults to ``table.function``.
    plot_dir : str, optional
        Directory in which to save generated plots (default is "plots").
    linewidth : float, optional
        Line width to use for plots. Uses default style if not specified.
    colors : dict, optional
        Color overrides keyed by element name (e.g. 'samples', 'error').
    """

    def __init__(
        self,
        table,
        reference_fn=None,
        plot_dir: str = "plots",
        linewidth: Optional[float] = None,
        colors: Optional[dict] = None,
    ):
        self.table = table
        self.reference_fn = table.function if reference_fn is None else reference_fn
        self.plot_dir = plot_dir

        os.makedirs(self.plot_dir, exist_ok=True)

        self.lw = DEFAULT_LINEWIDTH if linewidth is None else float(linewidth)
        self.colors = {**DEFAULT_COLORS, **(colors or {})}

    def color(self, key: str) -> str:
        """Return the color assigned to a plot element key."""
        return self.colors[key]

    def plot_samples(self, title=None, extra_info=None):
        """
        Plot the tabulated function with the stored samples marked on it.

        Parameters
        ----------
        title : str, optional
            Optional title for the plot.
        extra_info : str, optional
            Additional string to append to the saved filename.

        Returns
        -------
        str
            Path of the saved figure.
        """
        xs = self.table.samples.astype(float)
        ys = self.table.values.astype(float)
        dense = np.linspace(xs[0], xs[-1], max(500, 4 * xs.size))

        fig, ax = plt.subplots(figsize=(7, 4))
        ax.plot(dense, self.table.evaluate(dense), lw=self.lw,
                color=self.color("function"), label="interpolated")
        ax.plot(xs, ys, "o", ms=3, color=self.color("samples"),
                label=f"samples (n={xs.size})")
        ax.set_xlabel("$x$")
        ax.set_ylabel("$f(x)$")
        ax.legend(frameon=True)
        if title:
            ax.set_title(title)
        return self._save(fig, "table_samples", extra_info)

    def plot_step_sizes(self, title=None, extra_info=None):
        """
        Plot the spacing between consecutive samples along the interval,
        together with the ``dx_min`` and ``dx_max`` bounds.

        Returns
        -------
        str
            Path of the saved figure.
        """
        xs = self.table.samples.astype(float)
        steps = self.table.sample_steps().astype(float)

        fig, ax = plt.subplots(figsize=(7, 4))
        ax.step(xs[:-1], steps, where="post", lw=self.lw,
                color=self.color("step"), label="step")
        for bound, name in ((self.table.dx_min, "dx_min"), (self.table.dx_max, "dx_max")):
            ax.axhline(float(bound), ls="--", lw=1.0, color=self.color("bounds"))
            ax.annotate(name, (xs[0], float(bound)), textcoords="offset points",
                        xytext=(2, 2), fontsize=8)
        ax.set_yscale("log")
        ax.set_xlabel("$x$")
        ax.set_ylabel(r"$\Delta x$")
        ax.legend(frameon=True)
        if title:
            ax.set_title(title)
        return self._save(fig, "table_steps", extra_info)

    def plot_error(self, a=None, b=None, num_points=2000, title=None, extra_info=None):
        """
        Plot the absolute error of the table against the reference function.

        Parameters
        ----------
        a, b : float, optional
            Range to plot; defaults to the table interval. Ranges outside the
            interval show the extrapolation error.
        num_points : int, optional
            Number of evenly spaced evaluation points (default is 2000).

        Returns
        -------
        str
            Path of the saved figure.
        """
        a = float(self.table.a) if a is None else float(a)
        b = float(self.table.b) if b is None else float(b)
        xs, diff = error_samples(self.table.f, self.reference_fn, a, b, num_points)

        fig, ax = plt.subplots(figsize=(7, 4))
        ax.plot(xs, np.abs(diff), lw=self.lw, color=self.color("error"),
                label="|table - reference|")
        ax.axhline(float(self.table.df), ls="--", lw=1.0,
                   color=self.color("target"), label="df")
        ax.set_xlabel("$x$")
        ax.set_ylabel("absolute error")
        ax.legend(frameon=True)
        if title:
            ax.set_title(title)
        return self._save(fig, "table_error", extra_info)

    def _save(self, fig, name, extra_info=None):
        """Save and close ``fig`` under ``plot_dir``; return the file path."""
        suffix = f"_{extra_info}" if extra_info else ""
        path = os.path.join(self.plot_dir, f"{name}{suffix}.png")
        fig.tight_layout()
        fig.savefig(path, dpi=150)
        plt.close(fig)
        return path
