"""Diagnostics helpers for the adaptive sampler.

This module records per-sample information (location, value, derivative
magnitude, and the step chosen before and after clamping) while a lookup
table is being built, so tests and downstream tools can inspect where and why
samples were placed.
"""

from __future__ import annotations

import numpy as np


class SamplingRecorder:
    """Record per-sample diagnostics and build a test-friendly dict.

    When disabled, the recorder is not populated and ``build()`` returns an empty dict.
    """

    def __init__(self, *, enabled: bool, dx_min: float, dx_max: float, df: float):
        """Initialize the recorder.

        Args:
          enabled: If False, this recorder is inert.
          dx_min: Lower clamp of the step size, stored for reference.
          dx_max: Upper clamp of the step size, stored for reference.
          df: Target precision used by the step rule.
        """
        self.enabled = bool(enabled)
        if not self.enabled:
            return
        self._dx_min = float(dx_min)
        self._dx_max = float(dx_max)
        self._df = float(df)
        self._x = []
        self._fx = []
        self._fpx = []
        self._dx_raw = []
        self._dx = []

    def add(self, x, fx, fpx, dx_raw, dx) -> None:
        """Append diagnostics for one recorded sample.

        Args:
          x: Sample location.
          fx: Function value at ``x``.
          fpx: Magnitude of the derivative at ``x``.
          dx_raw: Step proposed by the step rule before clamping.
          dx: Step actually taken after clamping.
        """
        if not self.enabled:
            return
        self._x.append(float(x))
        self._fx.append(float(fx))
        self._fpx.append(float(fpx))
        self._dx_raw.append(float(dx_raw))
        self._dx.append(float(dx))

    def build(self) -> dict:
        """Build the diagnostics dictionary.

        Returns:
          A dictionary with keys ``x``, ``fx``, ``abs_fpx``, ``dx_raw``,
          ``dx``, ``clamped_low``, ``clamped_high``, ``dx_min``, ``dx_max``
          and ``df``. Returns ``{}`` if the recorder is disabled.
        """
        if not self.enabled:
            return {}
        dx_raw = np.asarray(self._dx_raw, float)
        return {
            "x": np.asarray(self._x, float),
            "fx": np.asarray(self._fx, float),
            "abs_fpx": np.asarray(self._fpx, float),
            "dx_raw": dx_raw,
            "dx": np.asarray(self._dx, float),
            # NaN proposals are clamped to dx_min
            "clamped_low": ~(dx_raw >= self._dx_min),
            "clamped_high": dx_raw > self._dx_max,
            "dx_min": self._dx_min,
            "dx_max": self._dx_max,
            "df": self._df,
        }
