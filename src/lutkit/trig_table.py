"""Provides the TrigTable class.

A single `LookupTable` of ``sin(x)`` over the canonical quarter period
``[0, pi/2]`` is enough to answer ``sin`` and ``cos`` on the whole real line:
odd symmetry, reflection about ``pi/2``, antisymmetry across ``pi`` and
periodicity fold every argument back into the tabulated quadrant.

Typical usage example:

>>>  trig = TrigTable(dx_min=1e-4, dx_max=1e-3, df=1e-5)
>>>  trig.sin(1.0), trig.cos(1.0)
"""

from __future__ import annotations

import warnings
from typing import Optional

import numpy as np

from lutkit.lookup_table import DEFAULT_DTYPE, LookupTable
from lutkit.sampling.validate import table_params_are_valid


class TrigTable:
    """Look-up table for ``sin(x)`` and ``cos(x)`` on the real line.

    The arguments ``0``, ``pi/2``, ``pi``, ``3pi/2`` and ``2pi`` (as rounded
    in ``dtype``) are compared with exact equality and return exact values.
    Everything else is reduced to ``[0, pi/2)`` and read from the table.

    Attributes:
        a: Lower end of the canonical interval, ``0``.
        b: Upper end of the canonical interval, ``pi/2``.
        dx_min: Smallest allowed increment of ``x`` in the inner table.
        dx_max: Largest allowed increment of ``x`` in the inner table.
        df: Desired precision of ``sin(x)`` and ``cos(x)``.
        pi, pi_over_2, three_pi_over_2, two_pi: Constants in ``dtype``.
        table: The inner `LookupTable` of ``sin`` on ``[0, pi/2]``.
    """

    def __init__(
        self,
        dx_min: float,
        dx_max: float,
        df: float,
        *,
        dtype=DEFAULT_DTYPE,
        diagnostics: bool = False,
        debug: bool = False,
        log_file: Optional[str] = None,
    ):
        """Builds the quarter-period table of ``sin``.

        Args:
            dx_min: Smallest acceptable step; ``0 < dx_min < dx_max``.
            dx_max: Largest acceptable step.
            df: Desired precision of ``sin(x)`` and ``cos(x)``; ``df > 0``.
            dtype: Floating type of the table. Default is ``np.float64``.
            diagnostics: Forwarded to the inner `LookupTable`.
            debug: Forwarded to the inner `LookupTable`.
            log_file: Forwarded to the inner `LookupTable`.

        Raises:
            ValueError: If the parameters are invalid.
        """
        self.dtype = np.dtype(dtype).type
        self.pi = self.dtype(np.pi)
        self.pi_over_2 = self.dtype(0.5) * self.pi
        self.three_pi_over_2 = self.dtype(1.5) * self.pi
        self.two_pi = self.dtype(2.0) * self.pi
        self.a = self.dtype(0)
        self.b = self.pi_over_2

        cast = self.dtype
        self.table = LookupTable(
            self.a,
            self.b,
            dx_min,
            dx_max,
            df,
            function=lambda x: cast(np.sin(np.float64(x))),
            derivative=lambda x: cast(np.cos(np.float64(x))),
            dtype=dtype,
            diagnostics=diagnostics,
            debug=debug,
            log_file=log_file,
        )
        self.dx_min = self.table.dx_min
        self.dx_max = self.table.dx_max
        self.df = self.table.df

    @classmethod
    def new(cls, dx_min: float, dx_max: float, df: float, **kwargs) -> Optional["TrigTable"]:
        """Builds a table, or returns `None` if the parameters are invalid."""
        dtype = kwargs.get("dtype", DEFAULT_DTYPE)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            valid = table_params_are_valid(0.0, np.pi / 2, dx_min, dx_max, df, dtype=dtype)
        if not valid:
            return None
        return cls(dx_min, dx_max, df, **kwargs)

    @property
    def size(self) -> int:
        """The number of values stored in the table."""
        return self.table.size

    def sin(self, x):
        """Returns ``sin(x)`` from the table, folding ``x`` into ``[0, pi/2]``.

        Args:
            x: Any real argument.

        Returns:
            The retrieved or interpolated value of ``sin(x)``, in ``dtype``.
        """
        x = self.dtype(x)
        if np.isnan(x):
            return x
        if x < 0:
            return -self.sin(-x)
        if x == 0 or x == self.pi or x == self.two_pi:
            return self.dtype(0)
        if x == self.pi_over_2:
            return self.dtype(1)
        if x == self.three_pi_over_2:
            return self.dtype(-1)
        if x < self.pi_over_2:
            return self.table.f(x)
        if x < self.pi:
            return self.sin(self.pi - x)
        if x < self.two_pi:
            return -self.sin(x - self.pi)
        return self.sin(np.fmod(x, self.two_pi))

    def cos(self, x):
        """Returns ``cos(x)`` using the identity ``cos(x) = sin(x + pi/2)``."""
        return self.sin(self.dtype(x) + self.pi_over_2)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dx_min={self.dx_min}, dx_max={self.dx_max}, "
            f"df={self.df}, size={self.size}, dtype={np.dtype(self.dtype).name})"
        )
