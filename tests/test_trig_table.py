"""Tests for TrigTable: accuracy against numpy, exact values, and symmetries."""

import numpy as np
import pytest

from lutkit import TrigTable, rms_error


@pytest.fixture(scope="module")
def trig32():
    """Single precision table with a fine step."""
    return TrigTable(dx_min=0.0001, dx_max=0.001, df=0.00001, dtype=np.float32)


@pytest.fixture(scope="module")
def trig64():
    """Double precision table with a fine step."""
    return TrigTable(dx_min=0.0001, dx_max=0.001, df=0.00001)


def test_sin_rms_on_canonical_interval(trig32):
    """RMS error of sin on [0, pi/2] is within df."""
    assert rms_error(trig32.sin, np.sin, 0.0, 0.5 * np.pi, 10_000) <= trig32.df


def test_cos_rms_on_canonical_interval(trig32):
    """RMS error of cos on [0, pi/2] is within df."""
    assert rms_error(trig32.cos, np.cos, 0.0, 0.5 * np.pi, 10_000) <= trig32.df


@pytest.mark.parametrize("name", ["sin", "cos"])
def test_rms_on_extended_domain(trig64, name):
    """All branch reductions stay accurate on [-3pi, 3pi]."""
    approx = getattr(trig64, name)
    reference = getattr(np, name)
    assert rms_error(approx, reference, -3 * np.pi, 3 * np.pi, 10_000) <= trig64.df


def test_sin_exact_values(trig64):
    """Roots and extrema of sin are returned exactly."""
    assert trig64.sin(0.0) == 0.0
    assert trig64.sin(np.pi / 2) == 1.0
    assert trig64.sin(np.pi) == 0.0
    assert trig64.sin(trig64.three_pi_over_2) == -1.0
    assert trig64.sin(trig64.two_pi) == 0.0
    assert trig64.sin(-np.pi / 2) == -1.0


def test_cos_exact_values(trig64):
    """cos shifts the same points by pi/2."""
    assert trig64.cos(-np.pi / 2) == 0.0
    assert trig64.cos(0.0) == 1.0
    assert trig64.cos(np.pi / 2) == 0.0
    assert trig64.cos(np.pi) == -1.0
    assert np.isclose(trig64.cos(trig64.three_pi_over_2), 0.0, atol=trig64.df)


def test_sin_is_odd(trig64):
    """sin(-x) == -sin(x) exactly."""
    for x in np.linspace(0.05, 12.0, 57):
        assert trig64.sin(-x) == -trig64.sin(x)


def test_sin_is_periodic(trig64):
    """sin(x + 2pi) ~ sin(x)."""
    for x in np.linspace(-7.0, 7.0, 41):
        assert np.isclose(trig64.sin(x + 2 * np.pi), trig64.sin(x), atol=trig64.df)


@pytest.mark.parametrize(
    "x",
    [0.3, 1.2, 2.0, 3.0, 3.5, 4.5, 6.0, 7.0, 20.0, 1000.0, -0.7, -5.0, -100.0],
)
def test_sin_each_branch(trig64, x):
    """Every quadrant and the periodic reduction match numpy."""
    assert np.isclose(trig64.sin(x), np.sin(x), atol=10 * trig64.df)


def test_sin_nan(trig64):
    """A NaN argument propagates."""
    assert np.isnan(trig64.sin(np.nan))
    assert np.isnan(trig64.cos(np.nan))


def test_float32_results(trig32):
    """Results carry the table's floating type."""
    assert isinstance(trig32.sin(0.3), np.float32)
    assert isinstance(trig32.cos(2.3), np.float32)
    assert trig32.table.samples.dtype == np.float32


def test_attributes(trig64):
    """Canonical interval and mirrored parameters are exposed."""
    assert trig64.a == 0.0
    assert trig64.b == trig64.pi_over_2
    assert trig64.table.b == trig64.pi_over_2
    assert trig64.size == trig64.table.size >= 2
    assert trig64.dx_min == 0.0001
    assert trig64.dx_max == 0.001
    assert trig64.df == 0.00001


@pytest.mark.parametrize(
    "dx_min, dx_max, df",
    [(0.0, 0.1, 0.01), (-0.1, 0.1, 0.01), (0.1, 0.1, 0.01), (0.01, 0.1, 0.0)],
)
def test_invalid_params(dx_min, dx_max, df):
    """Invalid parameters: constructor raises, factory returns None."""
    with pytest.raises(ValueError):
        TrigTable(dx_min, dx_max, df)
    assert TrigTable.new(dx_min, dx_max, df) is None


def test_new_builds_table():
    """The factory builds a usable table for valid parameters."""
    trig = TrigTable.new(0.01, 0.1, 0.001)
    assert isinstance(trig, TrigTable)
    assert np.isclose(trig.sin(0.5), np.sin(0.5), atol=1e-3)
