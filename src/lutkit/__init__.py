"""Provides all lutkit tables and helpers."""

from lutkit.accuracy import accuracy_report, max_abs_error, rms_error
from lutkit.lookup_table import LookupTable
from lutkit.trig_table import TrigTable
from lutkit.utils import (
    generate_test_function,
    is_strictly_increasing,
    log_debug_message,
)

__all__ = [
    "LookupTable",
    "TrigTable",
    "rms_error",
    "max_abs_error",
    "accuracy_report",
    "log_debug_message",
    "is_strictly_increasing",
    "generate_test_function",
]
