"""Plotting helpers for lookup tables (requires matplotlib)."""

from lutkit.plotutils.plot_kit import TablePlotter

__all__ = ["TablePlotter"]
