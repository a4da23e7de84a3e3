"""Data models."""
from .enums import SocketProtocol, TargetKind
from .schemas import RawSocket, ProcessHandle, SocketRecord, Target, Outcome

__all__ = [
    "SocketProtocol",
    "TargetKind",
    "RawSocket",
    "ProcessHandle",
    "SocketRecord",
    "Target",
    "Outcome",
]
