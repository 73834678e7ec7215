"""Empirical accuracy checks for lookup tables.

The step rule used while sampling controls the error only locally, so the
practical way to trust a table is to compare it with the exact function on a
dense grid. These helpers do that: evaluate both callables on evenly spaced
points and summarise the differences.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from lutkit.sampling.batch_eval import eval_function_batch

__all__ = ["error_samples", "rms_error", "max_abs_error", "accuracy_report"]


def error_samples(
    approx: Callable[[float], Any],
    reference: Callable[[float], Any],
    a: float,
    b: float,
    num_points: int = 10_000,
    n_workers: int = 1,
) -> tuple[np.ndarray, np.ndarray]:
    """Return a grid on ``[a, b]`` and ``approx - reference`` on it.

    Args:
        approx: The approximation, e.g. ``table.f`` or ``trig.sin``.
        reference: The exact function.
        a: Start of the grid.
        b: End of the grid (inclusive).
        num_points: Number of evenly spaced points; at least 2.
        n_workers: Processes used to evaluate ``reference``.

    Returns:
        ``(xs, diff)`` as float64 arrays.

    Raises:
        ValueError: If ``num_points < 2`` or ``a >= b``.
    """
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}.")
    if not a < b:
        raise ValueError(f"Invalid grid: a={a} must be smaller than b={b}.")
    xs = np.linspace(a, b, int(num_points))
    approx_vals = eval_function_batch(approx, xs)
    reference_vals = eval_function_batch(reference, xs, n_workers=n_workers)
    return xs, approx_vals - reference_vals


def rms_error(approx, reference, a, b, num_points=10_000, n_workers=1) -> float:
    """Root-mean-square of ``approx - reference`` on an even grid over ``[a, b]``."""
    _, diff = error_samples(approx, reference, a, b, num_points, n_workers)
    return float(np.sqrt(np.mean(diff * diff)))


def max_abs_error(approx, reference, a, b, num_points=10_000, n_workers=1) -> float:
    """Largest ``|approx - reference|`` on an even grid over ``[a, b]``."""
    _, diff = error_samples(approx, reference, a, b, num_points, n_workers)
    return float(np.max(np.abs(diff)))


def accuracy_report(
    approx: Callable[[float], Any],
    reference: Callable[[float], Any],
    a: float,
    b: float,
    df: float | None = None,
    num_points: int = 10_000,
    n_workers: int = 1,
) -> dict:
    """Summarise the error of ``approx`` against ``reference`` on ``[a, b]``.

    Args:
        approx: The approximation.
        reference: The exact function.
        a: Start of the grid.
        b: End of the grid (inclusive).
        df: Optional target precision; when given, the report says whether
            the RMS error meets it.
        num_points: Number of evenly spaced points.
        n_workers: Processes used to evaluate ``reference``.

    Returns:
        A dict with keys ``rms``, ``max_abs``, ``argmax`` (the grid point of
        the largest error), ``num_points`` and, if ``df`` is given, ``df``
        and ``within_df``.
    """
    xs, diff = error_samples(approx, reference, a, b, num_points, n_workers)
    abs_diff = np.abs(diff)
    worst = int(np.argmax(abs_diff))
    report = {
        "rms": float(np.sqrt(np.mean(diff * diff))),
        "max_abs": float(abs_diff[worst]),
        "argmax": float(xs[worst]),
        "num_points": int(num_points),
    }
    if df is not None:
        report["df"] = float(df)
        report["within_df"] = report["rms"] <= float(df)
    return report
