"""Fake OS clients with a fixed socket table and process list."""
import signal
from typing import Dict, Iterable, List, Optional
import pytest
from rkill.clients.base import SocketClient, ProcessClient, OSClientError, ProcessGoneError
from rkill.models.enums import SocketProtocol
from rkill.models.schemas import RawSocket, ProcessHandle
from rkill.services.process_directory import ProcessDirectory
from rkill.services.socket_enumerator import SocketEnumerator
from rkill.services.target_resolver import TargetResolver


class FakeSocketClient(SocketClient):
    def __init__(self, sockets: Iterable[RawSocket] = (), fail: bool = False):
        self.sockets = list(sockets)
        self.fail = fail
        self.calls = 0

    async def list_sockets(self) -> List[RawSocket]:
        self.calls += 1
        if self.fail:
            raise OSClientError("Cannot get socket info", detail="permission denied")
        return list(self.sockets)


class FakeProcessClient(ProcessClient):
    def __init__(
        self,
        processes: Optional[Dict[int, str]] = None,
        own_pid: Optional[int] = None,
        list_fails: bool = False,
        kill_errors: Optional[Dict[int, OSClientError]] = None,
    ):
        self.processes = dict(processes or {})
        self.own_pid = own_pid
        self.list_fails = list_fails
        self.kill_errors = kill_errors or {}
        self.pid_lookups: List[int] = []
        self.scans = 0
        self.signals: List[tuple] = []

    async def get_process(self, pid: int) -> ProcessHandle:
        self.pid_lookups.append(pid)
        if pid not in self.processes:
            raise ProcessGoneError(pid)
        return ProcessHandle(pid=pid, name=self.processes[pid])

    async def iter_processes(self):
        self.scans += 1
        if self.list_fails:
            raise OSClientError("Cannot collect process list", detail="no /proc")
        for pid, name in self.processes.items():
            yield ProcessHandle(pid=pid, name=name)

    async def send_signal(self, handle: ProcessHandle, sig: signal.Signals) -> None:
        self.signals.append((handle.pid, sig))
        if handle.pid in self.kill_errors:
            raise self.kill_errors[handle.pid]
        if handle.pid not in self.processes:
            raise ProcessGoneError(handle.pid)

    def current_pid(self) -> Optional[int]:
        return self.own_pid


def tcp(port: int, *pids: int) -> RawSocket:
    return RawSocket(protocol=SocketProtocol.TCP, local_port=port, pids=list(pids))


def udp(port: int, *pids: int) -> RawSocket:
    return RawSocket(protocol=SocketProtocol.UDP, local_port=port, pids=list(pids))


@pytest.fixture
def fake_os():
    """Build a (socket client, process client) pair."""
    def _build(sockets=(), processes=None, socket_fails=False, **process_kwargs):
        return (
            FakeSocketClient(sockets, fail=socket_fails),
            FakeProcessClient(processes, **process_kwargs),
        )
    return _build


@pytest.fixture
def make_resolver(fake_os):
    """Build a resolver over fake clients; returns (resolver, sockets, processes)."""
    def _build(sockets=(), processes=None, kill_signal="SIGKILL", **kwargs):
        socket_client, process_client = fake_os(sockets, processes, **kwargs)
        resolver = TargetResolver(
            enumerator=SocketEnumerator(socket_client, process_client),
            directory=ProcessDirectory(process_client, kill_signal=kill_signal),
        )
        return resolver, socket_client, process_client
    return _build


@pytest.fixture
def socket_factories():
    return tcp, udp
