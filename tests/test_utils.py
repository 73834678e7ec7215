"""Tests for the lightweight utilities."""

import numpy as np
import pytest

from lutkit import LookupTable
from lutkit.utils import (
    generate_test_function,
    is_strictly_increasing,
    log_debug_message,
)


@pytest.mark.parametrize(
    "values, expected",
    [
        ([0.0, 0.5, 1.0], True),
        ([0.0, 0.5, 0.5, 1.0], False),
        ([1.0, 0.0], False),
        ([[0.0, 1.0]], False),
    ],
)
def test_is_strictly_increasing(values, expected):
    """Duplicates, descending runs and non-1D input are rejected."""
    assert is_strictly_increasing(values) is expected


def test_log_debug_message_silent_by_default(capsys, tmp_path):
    """Nothing is printed or written unless asked."""
    log_file = tmp_path / "log.txt"
    log_debug_message("hello", log_file=str(log_file))
    assert capsys.readouterr().out == ""
    assert not log_file.exists()


def test_log_debug_message_appends(tmp_path):
    """Messages are appended one per line."""
    log_file = tmp_path / "log.txt"
    log_debug_message("one", log_file=str(log_file), log_to_file=True)
    log_debug_message("two", log_file=str(log_file), log_to_file=True)
    assert log_file.read_text(encoding="utf-8").splitlines() == ["one", "two"]


@pytest.mark.parametrize("name", ["sin", "cos", "square", "exp"])
def test_generate_test_function_builds_tables(name):
    """Every named pair builds a table that tracks the function."""
    f, fp = generate_test_function(name)
    table = LookupTable(0.0, 1.0, 0.001, 0.01, 0.0001, f, fp)
    assert np.isclose(table.f(0.3333), f(0.3333), atol=1e-4)


def test_generate_test_function_unknown():
    """Unknown names raise ValueError."""
    with pytest.raises(ValueError):
        generate_test_function("tan")
