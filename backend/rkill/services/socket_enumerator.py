"""Map open network sockets to the processes that own them."""
import logging
from typing import Any, List, Optional
from rkill.clients.base import SocketClient, ProcessClient, OSClientError, ProcessGoneError
from rkill.models.schemas import ProcessHandle, SocketRecord
from rkill.utils.helpers import with_reason

logger = logging.getLogger(__name__)


class EnumerationError(Exception):
    """Custom exception raised when the socket table cannot be listed."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class SocketEnumerator:
    """Builds a point-in-time socket -> process snapshot."""

    def __init__(self, socket_client: SocketClient, process_client: ProcessClient):
        self.socket_client = socket_client
        self.process_client = process_client

    async def enumerate(self) -> List[SocketRecord]:
        """
        Snapshot all TCP/UDP sockets (IPv4 and IPv6) with their owners.

        Sockets without an owner are skipped. When a socket reports several
        owners the first one is used. Owners that exit before they can be
        looked up are dropped silently.

        Returns:
            Records in the order the OS reported the sockets

        Raises:
            EnumerationError: If the socket table cannot be queried
        """
        try:
            sockets = await self.socket_client.list_sockets()
        except OSClientError as e:
            logger.warning(f"Socket enumeration failed: {e.message} ({e.detail})")
            raise EnumerationError(with_reason(e.message, e.detail), detail=e.detail) from e

        records: List[SocketRecord] = []
        for raw in sockets:
            if not raw.pids:
                continue
            pid = raw.pids[0]
            handle = await self._lookup(pid)
            if handle is None:
                continue
            records.append(
                SocketRecord(
                    protocol=raw.protocol,
                    local_port=raw.local_port,
                    owning_pid=pid,
                    process=handle,
                )
            )

        logger.debug(f"Mapped {len(records)} of {len(sockets)} sockets to processes")
        return records

    async def _lookup(self, pid: int) -> Optional[ProcessHandle]:
        try:
            return await self.process_client.get_process(pid)
        except ProcessGoneError:
            logger.debug(f"Owner pid {pid} exited during enumeration, dropping socket")
        except OSClientError as e:
            logger.debug(f"Cannot look up owner pid {pid}: {e.message}")
        return None
