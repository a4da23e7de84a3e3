"""Turn user tokens into kill attempts and collect their outcomes."""
import logging
import re
from typing import Any, List, Optional, Sequence, Union
from rkill.clients.psutil_client import PsutilSocketClient, PsutilProcessClient
from rkill.models.enums import TargetKind
from rkill.models.schemas import SocketRecord, Target, Outcome
from rkill.services.process_directory import ProcessDirectory, NotFoundError, KillError
from rkill.services.socket_enumerator import SocketEnumerator, EnumerationError

logger = logging.getLogger(__name__)

PORT_MARKER = ":"
MAX_PORT = 65535

_DIGITS = re.compile(r"[0-9]+")


class ParseError(Exception):
    """Custom exception for a malformed port reference."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


def parse_target(token: str) -> Target:
    """
    Classify a token as a port, pid or name reference.

    ":8080" is a port, "4312" is a pid, anything else is a process name.

    Raises:
        ParseError: If a port reference is not a number in 0..65535
    """
    if token.startswith(PORT_MARKER):
        rest = token[len(PORT_MARKER):]
        if not _DIGITS.fullmatch(rest) or int(rest) > MAX_PORT:
            raise ParseError(f"Cannot parse port '{rest}' as number")
        return Target(raw=token, kind=TargetKind.PORT, port=int(rest))

    if _DIGITS.fullmatch(token):
        return Target(raw=token, kind=TargetKind.PID, pid=int(token))

    return Target(raw=token, kind=TargetKind.NAME, name=token)


class TargetResolver:
    """Resolves every token once and kills what it finds."""

    def __init__(self, enumerator: SocketEnumerator, directory: ProcessDirectory):
        self.enumerator = enumerator
        self.directory = directory

    async def resolve(self, tokens: Sequence[str]) -> List[Outcome]:
        """
        Kill each referenced process, one outcome per token in input order.

        The socket table is read at most once, and only when at least one
        token is a port reference. No failure stops the remaining tokens.
        """
        parsed: List[Union[Target, ParseError]] = []
        for token in tokens:
            try:
                parsed.append(parse_target(token))
            except ParseError as e:
                parsed.append(e)

        records: Optional[List[SocketRecord]] = None
        enumeration_error: Optional[EnumerationError] = None
        if any(isinstance(p, Target) and p.kind == TargetKind.PORT for p in parsed):
            try:
                records = await self.enumerator.enumerate()
            except EnumerationError as e:
                enumeration_error = e

        outcomes: List[Outcome] = []
        for token, item in zip(tokens, parsed):
            if isinstance(item, ParseError):
                outcome = Outcome(target=token, success=False, message=item.message)
            elif item.kind == TargetKind.PORT:
                if enumeration_error is not None:
                    outcome = Outcome(
                        target=token, success=False, message=enumeration_error.message
                    )
                else:
                    outcome = await self._kill_by_port(item, records or [])
            elif item.kind == TargetKind.PID:
                outcome = await self._kill_by_pid(item)
            else:
                outcome = await self._kill_by_name(item)

            if not outcome.success:
                logger.info(f"Target {token!r} failed: {outcome.message}")
            outcomes.append(outcome)

        return outcomes

    async def _kill_by_port(self, target: Target, records: List[SocketRecord]) -> Outcome:
        port = target.port
        try:
            record = self.directory.find_socket(port, records)
            await self.directory.kill(record.process)
        except (NotFoundError, KillError) as e:
            return Outcome(target=target.raw, success=False, message=e.message)

        kind = record.protocol.value
        return Outcome(
            target=target.raw,
            success=True,
            message=f"Process holding port :{port} ({kind}) killed successfully!",
            kind=kind,
        )

    async def _kill_by_pid(self, target: Target) -> Outcome:
        try:
            handle = await self.directory.find_by_pid(target.pid)
            await self.directory.kill(handle)
        except (NotFoundError, KillError) as e:
            return Outcome(target=target.raw, success=False, message=e.message)

        return Outcome(
            target=target.raw,
            success=True,
            message=f"Process with pid {target.pid} killed successfully!",
            kind="PID",
        )

    async def _kill_by_name(self, target: Target) -> Outcome:
        try:
            handle = await self.directory.find_by_name(target.name)
            await self.directory.kill(handle)
        except (NotFoundError, KillError) as e:
            return Outcome(target=target.raw, success=False, message=e.message)

        return Outcome(
            target=target.raw,
            success=True,
            message=f"Process with name '{target.name}' killed successfully!",
            kind="name",
        )


def create_resolver(kill_signal: Optional[str] = None) -> TargetResolver:
    """Build a resolver wired to the live OS through psutil."""
    process_client = PsutilProcessClient()
    return TargetResolver(
        enumerator=SocketEnumerator(PsutilSocketClient(), process_client),
        directory=ProcessDirectory(process_client, kill_signal=kill_signal),
    )


async def kill_targets(tokens: Sequence[str], kill_signal: Optional[str] = None) -> List[Outcome]:
    """Resolve and kill every token against the live OS."""
    return await create_resolver(kill_signal=kill_signal).resolve(tokens)
