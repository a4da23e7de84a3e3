"""Pydantic schemas for sockets, processes and kill outcomes."""
from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict, Field
from .enums import SocketProtocol, TargetKind


# ============================================================================
# OS Snapshot Schemas
# ============================================================================

class RawSocket(BaseModel):
    """Socket entry as reported by the OS, before owner resolution."""
    protocol: SocketProtocol
    local_port: int = Field(..., ge=0, le=65535)
    pids: List[int] = Field(default_factory=list)


class ProcessHandle(BaseModel):
    """Reference to a live OS process."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    pid: int
    name: Optional[str] = None  # None when the name is not readable
    native: Any = Field(default=None, exclude=True, repr=False)


class SocketRecord(BaseModel):
    """Open socket mapped to the process that owns it."""
    protocol: SocketProtocol
    local_port: int = Field(..., ge=0, le=65535)
    owning_pid: int
    process: ProcessHandle


# ============================================================================
# Target / Outcome Schemas
# ============================================================================

class Target(BaseModel):
    """Classified user token."""
    raw: str
    kind: TargetKind
    port: Optional[int] = Field(default=None, ge=0, le=65535)
    pid: Optional[int] = None
    name: Optional[str] = None


class Outcome(BaseModel):
    """Result of one kill request, one per input token."""
    target: str
    success: bool
    message: str
    kind: Optional[str] = None  # TCP, UDP, PID or name once resolved
