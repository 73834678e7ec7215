"""Derivative-driven step rule and the forward-marching sampler.

Starting at ``a``, the sampler records ``(x, f(x))`` and then advances by a
step sized so that ``f`` changes by roughly ``df``:

1) ``dx = df / |f'(x)|``, or ``dx_max`` where the derivative vanishes;
2) ``dx`` is clamped to ``[dx_min, dx_max]``;
3) the next point is ``min(x + dx, b)``, so the last sample lands exactly on ``b``.

The rule is a first-order local estimate. It does not re-check the
interpolation error over ``[x, x + dx]`` after the step is taken, so ``df``
is a target rather than a guaranteed bound and should be chosen
conservatively.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

import numpy as np

from lutkit.sampling.diagnostics import SamplingRecorder

__all__ = ["next_step", "march_samples"]


def next_step(abs_fpx, df, dx_min, dx_max) -> Tuple[Any, Any]:
    """Return the proposed and the clamped step for a derivative magnitude.

    A NaN derivative yields a NaN proposal, which clamps to ``dx_min``.

    Args:
        abs_fpx: ``|f'(x)|`` at the current sample.
        df: Target change of ``f`` per step.
        dx_min: Smallest allowed step.
        dx_max: Largest allowed step.

    Returns:
        ``(dx_raw, dx)`` where ``dx`` lies in ``[dx_min, dx_max]``.
    """
    dx_raw = dx_max if abs_fpx == 0 else df / abs_fpx
    dx = min(max(dx_min, dx_raw), dx_max)
    return dx_raw, dx


def march_samples(
    function: Callable[[Any], Any],
    derivative: Callable[[Any], Any],
    a: float,
    b: float,
    dx_min: float,
    dx_max: float,
    df: float,
    dtype=np.float64,
    recorder: Optional[SamplingRecorder] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sample ``function`` on ``[a, b]`` with derivative-driven steps.

    Parameters are assumed to have passed ``validate_table_params``. All
    arithmetic happens in ``dtype`` and the callables' outputs are narrowed to
    it.

    Args:
        function: ``f(x)``, mapping a scalar to a scalar.
        derivative: ``f'(x)``, mapping a scalar to a scalar.
        a: Lower end of the interval.
        b: Upper end of the interval.
        dx_min: Smallest allowed step.
        dx_max: Largest allowed step.
        df: Target change of ``f`` per step.
        dtype: Floating-point type of the samples.
        recorder: Optional recorder fed once per sample.

    Returns:
        ``(xs, ys)``: aligned 1D arrays of ``dtype``; ``xs`` is strictly
        increasing with ``xs[0] == a`` and ``xs[-1] == b``.

    Raises:
        RuntimeError: If a step fails to advance ``x``.
    """
    cast = np.dtype(dtype).type
    a, b, dx_min, dx_max, df = (cast(v) for v in (a, b, dx_min, dx_max, df))

    xs = []
    ys = []
    x = a
    dx = cast(0)
    while x < b:
        x_next = min(x + dx, b)
        if xs and not x_next > x:
            raise RuntimeError(
                f"Sampling stalled at x={x} with dx={dx}; "
                "dx_min is below the resolution of the sample type."
            )
        x = x_next
        fx = cast(function(x))
        xs.append(x)
        ys.append(fx)
        abs_fpx = abs(cast(derivative(x)))
        dx_raw, dx = next_step(abs_fpx, df, dx_min, dx_max)
        if recorder is not None:
            recorder.add(x, fx, abs_fpx, dx_raw, dx)

    return np.asarray(xs, dtype=dtype), np.asarray(ys, dtype=dtype)
