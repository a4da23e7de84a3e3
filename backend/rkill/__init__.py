"""rkill - kill processes by PID, name or listening port."""

__version__ = "0.1.0"
