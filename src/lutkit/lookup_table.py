"""Provides the LookupTable class.

The user must specify the function to tabulate, its derivative, the closed
interval ``[a, b]``, the bounds on the sampling step and the desired precision
of the tabulated values. Sample points are placed adaptively: where the
function changes quickly the step shrinks, where it is flat the step grows.
Values between samples are obtained by linear interpolation.

Typical usage example:

>>>  table = LookupTable(
>>>    0.0, 10.0, dx_min=0.01, dx_max=1.0, df=0.01,
>>>    function=lambda x: x**2, derivative=lambda x: 2 * x,
>>>  )
>>>  table.f(5.0)

returns an approximation of 25 interpolated from the stored samples.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Optional

import numdifftools as nd
import numpy as np

from lutkit.sampling.diagnostics import SamplingRecorder
from lutkit.sampling.stepping import march_samples
from lutkit.sampling.validate import table_params_are_valid, validate_table_params
from lutkit.utils import log_debug_message

DEFAULT_DTYPE = np.float64


class LookupTable:
    """Look-up table for ``f(x)`` on ``[a, b]`` with adaptive sampling.

    The table is built once, at construction, by marching from ``a`` to ``b``
    with steps ``df / |f'(x)|`` clamped to ``[dx_min, dx_max]``. The last step
    is shortened so that the final sample is exactly ``b``. After construction
    the table is immutable and queries never call ``function`` again.

    Queries inside ``[a, b]`` return the stored value on an exact hit and the
    linear interpolant of the bracketing samples otherwise. Queries outside
    ``[a, b]`` are extrapolated from the first or last two samples without any
    warning, and may be wildly inaccurate far from the interval.

    The step rule is a first-order local estimate. Nothing checks afterwards
    that the interpolation error over a step stays below ``df``, so choose
    ``df`` conservatively and validate with `lutkit.accuracy` if needed.

    The number of samples is at most ``ceil(|b - a| / dx_min) + 1`` up to
    rounding: repeated ``x + dx`` can stop one ulp short of ``b``, in which
    case ``b`` is appended as one extra sample and the last segment is a
    single ulp wide.

    Attributes:
        a: Lower end of the interval, in ``dtype``.
        b: Upper end of the interval, in ``dtype``.
        dx_min: Smallest allowed increment of ``x``.
        dx_max: Largest allowed increment of ``x``.
        df: Desired precision of the tabulated values.
        function: The tabulated function ``f(x)``.
        derivative: The derivative ``f'(x)`` used to size the steps.
        dtype: The numpy floating type of every stored number.
        diagnostics_data (dict, optional): Per-sample record of the sampling
            run if requested at construction, otherwise `None`.
    """

    def __init__(
        self,
        a: float,
        b: float,
        dx_min: float,
        dx_max: float,
        df: float,
        function: Callable[[Any], Any],
        derivative: Callable[[Any], Any],
        *,
        dtype=DEFAULT_DTYPE,
        diagnostics: bool = False,
        debug: bool = False,
        log_file: Optional[str] = None,
    ):
        """Validates the parameters and samples the function.

        Args:
            a: Lower end of the closed interval ``[a, b]``; ``a < b``.
            b: Upper end of the closed interval ``[a, b]``.
            dx_min: Smallest acceptable step; ``0 < dx_min < dx_max``.
            dx_max: Largest acceptable step.
            df: Desired precision of ``f(x)``; ``df > 0``.
            function: The function to tabulate. Must map a scalar to a scalar.
            derivative: The derivative of ``function``.
            dtype: Floating type used for samples, values and arithmetic.
                Default is ``np.float64``; ``np.float32`` is supported.
            diagnostics: If True, keep a per-sample record of the sampling
                run in ``diagnostics_data``.
            debug: If True, print a summary of the built table.
            log_file: Optional path the summary is appended to.

        Raises:
            ValueError: If the parameters are invalid. No sampling happens in
                that case.
        """
        validate_table_params(a, b, dx_min, dx_max, df, dtype=dtype)

        self.dtype = np.dtype(dtype).type
        self.a = self.dtype(a)
        self.b = self.dtype(b)
        self.dx_min = self.dtype(dx_min)
        self.dx_max = self.dtype(dx_max)
        self.df = self.dtype(df)
        self.function = function
        self.derivative = derivative
        self.debug = debug
        self.log_file = log_file

        recorder = SamplingRecorder(
            enabled=diagnostics, dx_min=self.dx_min, dx_max=self.dx_max, df=self.df
        )
        xs, ys = march_samples(
            function,
            derivative,
            self.a,
            self.b,
            self.dx_min,
            self.dx_max,
            self.df,
            dtype=self.dtype,
            recorder=recorder,
        )
        xs.setflags(write=False)
        ys.setflags(write=False)
        self._xs = xs
        self._ys = ys
        self.diagnostics_data = recorder.build() if diagnostics else None

        log_debug_message(
            f"[LookupTable] [{self.a}, {self.b}] dx_min={self.dx_min} "
            f"dx_max={self.dx_max} df={self.df}: {self.size} samples",
            debug=debug,
            log_file=log_file,
            log_to_file=log_file is not None,
        )

    @classmethod
    def new(
        cls,
        a: float,
        b: float,
        dx_min: float,
        dx_max: float,
        df: float,
        function: Callable[[Any], Any],
        derivative: Callable[[Any], Any],
        **kwargs,
    ) -> Optional["LookupTable"]:
        """Builds a table, or returns `None` if the parameters are invalid.

        Takes the same arguments as the constructor.
        """
        dtype = kwargs.get("dtype", DEFAULT_DTYPE)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            valid = table_params_are_valid(a, b, dx_min, dx_max, df, dtype=dtype)
        if not valid:
            return None
        return cls(a, b, dx_min, dx_max, df, function, derivative, **kwargs)

    @classmethod
    def from_function(
        cls,
        a: float,
        b: float,
        dx_min: float,
        dx_max: float,
        df: float,
        function: Callable[[Any], Any],
        **kwargs,
    ) -> "LookupTable":
        """Builds a table using a numerical derivative of ``function``.

        The derivative is estimated with ``numdifftools.Derivative``, which
        evaluates ``function`` slightly outside ``[a, b]`` near the ends.
        Prefer the constructor when an analytic derivative is available.

        Args:
            a: Lower end of the interval.
            b: Upper end of the interval.
            dx_min: Smallest acceptable step.
            dx_max: Largest acceptable step.
            df: Desired precision of ``f(x)``.
            function: The function to tabulate.
            **kwargs: Keyword arguments forwarded to the constructor.

        Returns:
            LookupTable: The built table.
        """
        derivative = nd.Derivative(function, n=1)
        return cls(a, b, dx_min, dx_max, df, function, derivative, **kwargs)

    @property
    def size(self) -> int:
        """The number of pairs ``(x, f(x))`` stored in the table."""
        return int(self._xs.size)

    def __len__(self) -> int:
        return self.size

    @property
    def samples(self) -> np.ndarray:
        """Read-only, strictly increasing sample points from ``a`` to ``b``."""
        return self._xs

    @property
    def values(self) -> np.ndarray:
        """Read-only function values aligned with ``samples``."""
        return self._ys

    def sample_steps(self) -> np.ndarray:
        """Returns the spacing between consecutive samples."""
        return np.diff(self._xs)

    def f(self, x):
        """Returns ``f(x)`` retrieved from the table or interpolated.

        If ``x`` is a stored sample its stored value is returned as is.
        Otherwise the value is interpolated between the two samples that
        bracket ``x``, or extrapolated from the first (last) two samples when
        ``x < a`` (``x > b``). A NaN argument yields NaN.

        Args:
            x: The value for which to retrieve or compute ``f(x)``. For
                accurate results, ``x`` should lie in ``[a, b]``.

        Returns:
            The retrieved or computed value of ``f(x)``, in ``dtype``.

        Raises:
            RuntimeError: If the bracketing samples are not strictly
                increasing, which means the table is corrupted.
        """
        x = self.dtype(x)
        if np.isnan(x):
            return x

        xs = self._xs
        i = int(np.searchsorted(xs, x))
        if i < xs.size and xs[i] == x:
            return self._ys[i]

        if x < self.a:
            k = 0
        elif x > self.b:
            k = xs.size - 2
        else:
            k = i - 1
        return self._interpolate(x, k)

    __call__ = f

    def evaluate(self, x_vals) -> np.ndarray:
        """Vectorised version of :meth:`f` for an array of arguments.

        Args:
            x_vals: Array-like of arguments, any shape.

        Returns:
            np.ndarray: Values of ``dtype`` with the shape of ``x_vals``.

        Raises:
            RuntimeError: If a bracket is not strictly increasing.
        """
        x = np.asarray(x_vals, dtype=self.dtype)
        xs, ys = self._xs, self._ys
        n = xs.size

        idx = np.searchsorted(xs, x)
        k = np.clip(idx - 1, 0, n - 2)
        x_k = xs[k]
        span = xs[k + 1] - x_k
        if np.any(span <= 0):
            raise RuntimeError(
                "x_(k+1) <= x_(k) in the sample sequence; the table is corrupted."
            )
        out = ys[k] + (ys[k + 1] - ys[k]) * ((x - x_k) / span)

        hit_idx = np.minimum(idx, n - 1)
        hit = (idx < n) & (xs[hit_idx] == x)
        return np.where(hit, ys[hit_idx], out)

    def _interpolate(self, x, k: int):
        """Linear interpolation through samples ``k`` and ``k + 1``."""
        x_k = self._xs[k]
        x_kp1 = self._xs[k + 1]
        span = x_kp1 - x_k
        if not span > 0:
            raise RuntimeError(
                f"x_(k+1)={x_kp1} <= x_(k)={x_k} for x={x}; the table is corrupted."
            )
        f_k = self._ys[k]
        f_kp1 = self._ys[k + 1]
        return f_k + (f_kp1 - f_k) * ((x - x_k) / span)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(a={self.a}, b={self.b}, dx_min={self.dx_min}, "
            f"dx_max={self.dx_max}, df={self.df}, size={self.size}, "
            f"dtype={np.dtype(self.dtype).name})"
        )
