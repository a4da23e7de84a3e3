"""OS clients for sockets and processes."""
from .base import SocketClient, ProcessClient, OSClientError, ProcessGoneError
from .psutil_client import PsutilSocketClient, PsutilProcessClient

__all__ = [
    "SocketClient",
    "ProcessClient",
    "OSClientError",
    "ProcessGoneError",
    "PsutilSocketClient",
    "PsutilProcessClient",
]
