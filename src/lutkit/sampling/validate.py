"""Input validation utilities for building lookup tables."""

from __future__ import annotations

import math
import warnings

import numpy as np

__all__ = [
    "LARGE_TABLE_WARNING",
    "validate_table_params",
    "table_params_are_valid",
    "sample_count_upper_bound",
]

LARGE_TABLE_WARNING = 10_000_000


def sample_count_upper_bound(a: float, b: float, dx_min: float) -> int:
    """Return the largest number of samples the forward march can record.

    Args:
        a: Lower end of the interval.
        b: Upper end of the interval.
        dx_min: Smallest allowed step.

    Returns:
        ``ceil(|b - a| / dx_min) + 1``.
    """
    return int(math.ceil(abs(float(b) - float(a)) / float(dx_min))) + 1


def validate_table_params(
    a: float,
    b: float,
    dx_min: float,
    dx_max: float,
    df: float,
    dtype=np.float64,
) -> None:
    """Validate the construction parameters of a lookup table.

    The bounds are compared after narrowing to ``dtype``, so an interval that
    collapses to a single point in single precision is rejected.

    Args:
        a: Lower end of the closed interval ``[a, b]``.
        b: Upper end of the closed interval ``[a, b]``.
        dx_min: Smallest allowed increment of ``x``.
        dx_max: Largest allowed increment of ``x``.
        df: Desired absolute precision of the tabulated values.
        dtype: Floating-point type the table stores its numbers in.

    Raises:
        ValueError: If ``a >= b``, ``dx_min <= 0``, ``dx_max <= dx_min``,
            ``df <= 0``, any value is not finite, ``dtype`` is not a floating
            type, or ``dx_min`` is finer than the resolution of ``dtype`` on
            ``[a, b]``.

    Warns:
        RuntimeWarning: If the table could hold more than
            ``LARGE_TABLE_WARNING`` samples.
    """
    if not np.issubdtype(np.dtype(dtype), np.floating):
        raise ValueError(f"dtype must be a floating-point type, got {dtype!r}.")

    a, b, dx_min, dx_max, df = (
        np.dtype(dtype).type(v) for v in (a, b, dx_min, dx_max, df)
    )
    if not all(np.isfinite(v) for v in (a, b, dx_min, dx_max, df)):
        raise ValueError("a, b, dx_min, dx_max and df must all be finite.")
    if not a < b:
        raise ValueError(f"Invalid interval: a={a} must be smaller than b={b}.")
    if not dx_min > 0:
        raise ValueError(f"Invalid dx_min={dx_min}: must be positive.")
    if not dx_max > dx_min:
        raise ValueError(
            f"Invalid dx_max={dx_max}: must be larger than dx_min={dx_min}."
        )
    if not df > 0:
        raise ValueError(f"Invalid df={df}: must be positive.")

    resolution = np.spacing(max(abs(a), abs(b)))
    if dx_min < resolution:
        raise ValueError(
            f"dx_min={dx_min} is below the resolution {resolution} of "
            f"{np.dtype(dtype).name} on [{a}, {b}]."
        )

    bound = sample_count_upper_bound(a, b, dx_min)
    if bound > LARGE_TABLE_WARNING:
        warnings.warn(
            f"The table over [{a}, {b}] may hold up to {bound} samples "
            f"with dx_min={dx_min}; construction can be slow.",
            RuntimeWarning,
        )


def table_params_are_valid(
    a: float,
    b: float,
    dx_min: float,
    dx_max: float,
    df: float,
    dtype=np.float64,
) -> bool:
    """Return True if ``validate_table_params`` accepts the parameters."""
    try:
        validate_table_params(a, b, dx_min, dx_max, df, dtype=dtype)
    except ValueError:
        return False
    return True
