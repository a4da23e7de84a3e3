"""Process lookup by port, pid or name, and signal delivery."""
import logging
import signal
from typing import Any, Optional, Sequence
from rkill.clients.base import ProcessClient, OSClientError, ProcessGoneError
from rkill.config import settings
from rkill.models.schemas import ProcessHandle, SocketRecord
from rkill.utils.helpers import normalize_signal, with_reason, describe_process

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Custom exception when no process matches a port, pid or name."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class KillError(Exception):
    """Custom exception when a signal could not be delivered."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class ProcessDirectory:
    """Resolves references to live processes and terminates them."""

    def __init__(
        self,
        process_client: ProcessClient,
        kill_signal: Optional[str] = None,
        skip_self: Optional[bool] = None,
    ):
        self.process_client = process_client
        self.kill_signal = signal.Signals[normalize_signal(kill_signal or settings.KILL_SIGNAL)]
        self.skip_self = settings.SKIP_SELF if skip_self is None else skip_self

    def find_by_port(self, port: int, records: Sequence[SocketRecord]) -> ProcessHandle:
        """Find the process holding a local port."""
        return self.find_socket(port, records).process

    def find_socket(self, port: int, records: Sequence[SocketRecord]) -> SocketRecord:
        """
        Find the socket record holding a local port.

        The first record in enumeration order wins, whatever its protocol.
        """
        for record in records:
            if record.local_port == port:
                return record
        raise NotFoundError(f"Process that holds port :{port} could not be found.")

    async def find_by_pid(self, pid: int) -> ProcessHandle:
        """Look up a process directly by pid."""
        try:
            return await self.process_client.get_process(pid)
        except OSClientError as e:
            raise NotFoundError(f"Cannot get process with pid {pid}", detail=e.message) from e

    async def find_by_name(self, name: str) -> ProcessHandle:
        """
        Scan the process list for the first exact, case-sensitive name match.

        Raises:
            NotFoundError: If the list cannot be collected or nothing matches
        """
        own_pid = self.process_client.current_pid() if self.skip_self else None
        scanned = 0
        try:
            async for handle in self.process_client.iter_processes():
                scanned += 1
                if handle.name == name and handle.pid != own_pid:
                    logger.debug(f"Matched '{name}' to pid {handle.pid} after {scanned} processes")
                    return handle
        except OSClientError as e:
            raise NotFoundError(
                with_reason("Cannot collect process list", e.detail), detail=e.detail
            ) from e

        raise NotFoundError(f"Cannot find process with name '{name}'")

    async def kill(self, handle: ProcessHandle) -> None:
        """
        Send the kill signal. Success means delivery, not confirmed exit.

        Raises:
            KillError: If the signal could not be delivered
        """
        subject = f"Cannot kill process {describe_process(handle.pid, handle.name)}"
        try:
            await self.process_client.send_signal(handle, self.kill_signal)
        except ProcessGoneError as e:
            raise KillError(with_reason(subject, "process already exited"), detail=e.message) from e
        except OSClientError as e:
            reason = e.detail or e.message
            raise KillError(with_reason(subject, reason), detail=reason) from e

        logger.info(f"Sent {self.kill_signal.name} to pid {handle.pid} ({handle.name})")
