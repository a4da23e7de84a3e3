"""Abstract OS capabilities used by the services.

The operating system is treated as a read-only data source plus a signal
sink. Services only talk to these interfaces, so tests can swap in fakes
with a fixed socket table and process list.
"""
import signal
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, List, Optional
from rkill.models.schemas import RawSocket, ProcessHandle


class OSClientError(Exception):
    """Custom exception for failed OS queries or signal delivery."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class ProcessGoneError(OSClientError):
    """The process does not exist (or exited while we were looking)."""

    def __init__(self, pid: int, detail: Any = None):
        self.pid = pid
        super().__init__(f"No process with pid {pid}", detail=detail)


class SocketClient(ABC):
    """Lists open TCP/UDP sockets of both address families."""

    @abstractmethod
    async def list_sockets(self) -> List[RawSocket]:
        """
        Take one snapshot of the socket table.

        Raises:
            OSClientError: If the socket table cannot be queried
        """


class ProcessClient(ABC):
    """Looks up and signals OS processes."""

    @abstractmethod
    async def get_process(self, pid: int) -> ProcessHandle:
        """
        Get a handle for a live process.

        Raises:
            ProcessGoneError: If no process with this pid exists
        """

    @abstractmethod
    def iter_processes(self) -> AsyncIterator[ProcessHandle]:
        """
        Iterate over every live process.

        Raises:
            OSClientError: If the process list cannot be collected
        """

    @abstractmethod
    async def send_signal(self, handle: ProcessHandle, sig: signal.Signals) -> None:
        """
        Deliver a signal without waiting for the process to exit.

        Raises:
            ProcessGoneError: If the process is already gone
            OSClientError: If delivery fails for any other reason
        """

    def current_pid(self) -> Optional[int]:
        """Pid of the running tool, if it lives in this process table."""
        return None
