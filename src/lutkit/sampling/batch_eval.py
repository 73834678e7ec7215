"""Batch evaluation utilities for lookup-table validation.

Evaluate a scalar function over a 1D grid with optional parallelism and return
a 1D float array, e.g. a reference function on a dense grid when measuring the
error of a table (see `lutkit.accuracy`).
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from multiprocess import Pool

__all__ = ["eval_function_batch"]


def _eval_serial(function: Callable[[float], Any], xs: np.ndarray) -> list:
    """Evaluate a function over points serially.

    Args:
      function: Callable mapping a float to a scalar.
      xs: 1D array of abscissae.

    Returns:
      list: One value per input x.
    """
    return [function(x) for x in xs]


def _eval_parallel(
    function: Callable[[float], Any],
    xs: np.ndarray,
    n_workers: int,
) -> list:
    """Evaluate a function over points in parallel.

    Uses ``multiprocess.Pool`` with ``n_workers`` processes. Falls back to the
    serial path if the workload is too small or if pool creation/execution fails.

    Args:
      function: Maps a float to a scalar.
      xs: 1D abscissae to evaluate.
      n_workers: Desired number of processes.

    Returns:
      list: One value per input, order-preserving.
    """
    if n_workers <= 1:
        return _eval_serial(function, xs)

    # Light heuristic: avoid pool overhead for tiny workloads.
    n = max(1, min(int(n_workers), int(xs.size)))
    if xs.size < max(8, 2 * n):
        return _eval_serial(function, xs)

    try:
        with Pool(n) as pool:
            return pool.map(function, list(xs))
    except (OSError, RuntimeError, ValueError):
        # Spawn/pickle/start-method issues -> serial fallback.
        return _eval_serial(function, xs)


def eval_function_batch(
    function: Callable[[float], Any],
    xs: np.ndarray,
    n_workers: int = 1,
    dtype=np.float64,
) -> np.ndarray:
    """Evaluate a scalar function over 1D inputs and return a 1D array.

    Evaluates ``function(x)`` for each ``x`` in ``xs`` after narrowing ``xs``
    to ``dtype``. If ``n_workers > 1``, uses a ``multiprocess.Pool``;
    otherwise runs serially.

    Args:
      function: Callable mapping a float to a scalar.
      xs: 1D array of abscissae.
      n_workers: If > 1, evaluate in parallel using ``multiprocess``.
      dtype: Floating type of the inputs and of the returned array.

    Returns:
      np.ndarray: Array of shape ``(n_points,)``.

    Raises:
      ValueError: If ``xs`` is not 1D or the function returns non-scalars.

    Examples:
      >>> import numpy as np
      >>> xs = np.linspace(0.0, 1.0, 5)
      >>> eval_function_batch(np.sin, xs).shape
      (5,)
    """
    xs = np.asarray(xs, dtype=dtype)
    if xs.ndim != 1:
        raise ValueError(f"eval_function_batch: xs.ndim must be 1 but is {xs.ndim}.")

    ys = _eval_parallel(function, xs, n_workers) if n_workers > 1 else _eval_serial(
        function, xs
    )

    sizes = [np.asarray(y).size for y in ys]
    if any(size != 1 for size in sizes):
        raise ValueError(
            "eval_function_batch: function must return scalars; "
            f"got output sizes {sorted(set(sizes))}"
        )
    return np.asarray([np.asarray(y).item() for y in ys], dtype=dtype)
