"""Business logic services."""
from .socket_enumerator import SocketEnumerator, EnumerationError
from .process_directory import ProcessDirectory, NotFoundError, KillError
from .target_resolver import (
    TargetResolver,
    ParseError,
    parse_target,
    create_resolver,
    kill_targets,
)

__all__ = [
    "SocketEnumerator",
    "EnumerationError",
    "ProcessDirectory",
    "NotFoundError",
    "KillError",
    "TargetResolver",
    "ParseError",
    "parse_target",
    "create_resolver",
    "kill_targets",
]
