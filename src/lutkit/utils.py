"""Lightweight utility functions used across lutkit.

These helpers have no heavy dependencies or side effects and are safe to import
from anywhere (library code, tests, notebooks). They cover debug logging, a
sanity check for sample sequences, and example function/derivative pairs.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "log_debug_message",
    "is_strictly_increasing",
    "generate_test_function",
]


def log_debug_message(
    message: str,
    debug: bool = False,
    log_file: str | None = None,
    log_to_file: bool | None = None,
) -> None:
    """Optionally print and/or append a debug message.

    Args:
        message: Text to log.
        debug: If True, print to stdout.
        log_file: Path to a log file (used if ``log_to_file`` is True).
        log_to_file: If True, append to ``log_file`` when provided.
    """
    if not debug and not log_to_file:
        return
    if debug:
        print(message)
    if log_to_file and log_file:
        try:
            with open(log_file, "a", encoding="utf-8") as fh:
                fh.write(message + "\n")
        except OSError as e:  # pragma: no cover - defensive
            print(f"[log_debug_message] Failed to write to log file: {e}")


def is_strictly_increasing(x_vals) -> bool:
    """Return True if ``x_vals`` is 1D, has no duplicates and is sorted ascending."""
    x_vals = np.asarray(x_vals)
    if x_vals.ndim != 1:
        return False
    return bool(np.all(np.diff(x_vals) > 0))


def generate_test_function(name: str = "sin"):
    """Return an ``(f, f')`` tuple for a named test function.

    Args:
        name: One of {"sin", "cos", "square", "exp"}.

    Returns:
        Tuple of callables (f, df) suitable for building a table.
    """
    if name == "sin":
        return lambda x: np.sin(x), lambda x: np.cos(x)
    if name == "cos":
        return lambda x: np.cos(x), lambda x: -np.sin(x)
    if name == "square":
        return lambda x: x * x, lambda x: 2 * x
    if name == "exp":
        return lambda x: np.exp(x), lambda x: np.exp(x)
    raise ValueError(f"Unknown test function: {name!r}")
