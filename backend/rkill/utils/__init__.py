"""Utility functions."""
from .helpers import normalize_signal, with_reason, describe_process, format_outcome, exit_code

__all__ = [
    "normalize_signal",
    "with_reason",
    "describe_process",
    "format_outcome",
    "exit_code",
]
