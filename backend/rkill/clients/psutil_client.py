"""psutil-backed socket and process clients."""
import logging
import os
import signal
import socket
from typing import AsyncIterator, List, Optional
import psutil
from rkill.clients.base import SocketClient, ProcessClient, OSClientError, ProcessGoneError
from rkill.models.enums import SocketProtocol
from rkill.models.schemas import RawSocket, ProcessHandle

logger = logging.getLogger(__name__)

_PROTOCOLS = {
    socket.SOCK_STREAM: SocketProtocol.TCP,
    socket.SOCK_DGRAM: SocketProtocol.UDP,
}


class PsutilSocketClient(SocketClient):
    """Socket table read through psutil.net_connections()."""

    async def list_sockets(self) -> List[RawSocket]:
        try:
            # "inet" covers tcp4, tcp6, udp4 and udp6 in a single call
            connections = psutil.net_connections(kind="inet")
        except psutil.AccessDenied as e:
            raise OSClientError("Cannot get socket info", detail="permission denied") from e
        except (psutil.Error, OSError) as e:
            raise OSClientError("Cannot get socket info", detail=str(e)) from e

        sockets: List[RawSocket] = []
        for conn in connections:
            protocol = _PROTOCOLS.get(conn.type)
            if protocol is None or not conn.laddr:
                continue
            sockets.append(
                RawSocket(
                    protocol=protocol,
                    local_port=conn.laddr.port,
                    pids=[conn.pid] if conn.pid is not None else [],
                )
            )

        logger.debug(f"Socket table snapshot: {len(sockets)} entries")
        return sockets


class PsutilProcessClient(ProcessClient):
    """Process table read and signalled through psutil."""

    async def get_process(self, pid: int) -> ProcessHandle:
        try:
            process = psutil.Process(pid)
        except psutil.NoSuchProcess as e:
            raise ProcessGoneError(pid, detail=str(e)) from e
        except (ValueError, OverflowError) as e:
            # pid outside the platform's range can never exist
            raise ProcessGoneError(pid, detail=str(e)) from e
        except (psutil.Error, OSError) as e:
            raise OSClientError(f"Cannot query process {pid}", detail=str(e)) from e

        return ProcessHandle(pid=pid, name=self._read_name(process), native=process)

    async def iter_processes(self) -> AsyncIterator[ProcessHandle]:
        try:
            # process_iter skips processes that vanish and sets unreadable attrs to None
            for process in psutil.process_iter(["name"]):
                yield ProcessHandle(
                    pid=process.pid,
                    name=process.info.get("name"),
                    native=process,
                )
        except (psutil.Error, OSError) as e:
            raise OSClientError("Cannot collect process list", detail=str(e)) from e

    async def send_signal(self, handle: ProcessHandle, sig: signal.Signals) -> None:
        process = handle.native
        try:
            if process is None:
                process = psutil.Process(handle.pid)
            # send_signal refuses to signal a pid that has been reused
            process.send_signal(sig)
        except psutil.NoSuchProcess as e:
            raise ProcessGoneError(handle.pid, detail=str(e)) from e
        except psutil.AccessDenied as e:
            raise OSClientError(f"Cannot signal process {handle.pid}", detail="permission denied") from e
        except (psutil.Error, OSError, ValueError) as e:
            # psutil raises ValueError for pid 0 instead of signalling it
            raise OSClientError(f"Cannot signal process {handle.pid}", detail=str(e)) from e

    def current_pid(self) -> Optional[int]:
        return os.getpid()

    @staticmethod
    def _read_name(process: psutil.Process) -> Optional[str]:
        try:
            return process.name()
        except (psutil.AccessDenied, psutil.NoSuchProcess):
            # A vanished process still gets a handle; the kill reports it gone
            return None
