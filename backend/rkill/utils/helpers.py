"""Helper utility functions."""
import signal
from typing import Any, Optional, Sequence
from rkill.models.schemas import Outcome

SUCCESS_MARK = "✅"
FAILURE_MARK = "❌"


def normalize_signal(name: str) -> str:
    """Turn 'term', 'SIGTERM' or '15' into a canonical signal name."""
    value = name.strip().upper()
    if value.isdigit():
        try:
            return signal.Signals(int(value)).name
        except ValueError:
            raise ValueError(f"Unknown signal number: {name}") from None
    if not value.startswith("SIG"):
        value = f"SIG{value}"
    if value not in signal.Signals.__members__:
        raise ValueError(f"Unknown signal name: {name}")
    return value


def with_reason(message: str, detail: Any = None) -> str:
    """Append the underlying cause to a failure message when there is one."""
    return f"{message}: {detail}" if detail else message


def describe_process(pid: int, name: Optional[str]) -> str:
    return f"{pid} ({name})" if name else str(pid)


def format_outcome(outcome: Outcome) -> str:
    """Render one outcome as a console line."""
    mark = SUCCESS_MARK if outcome.success else FAILURE_MARK
    return f"{mark} {outcome.message}"


def exit_code(outcomes: Sequence[Outcome]) -> int:
    """0 when every target was killed, 1 otherwise."""
    return 0 if all(o.success for o in outcomes) else 1
