"""Enumerations for the application."""
from enum import Enum


class SocketProtocol(str, Enum):
    """Transport protocol of an open socket."""
    TCP = "TCP"
    UDP = "UDP"


class TargetKind(str, Enum):
    """How a user-supplied token refers to a process."""
    PORT = "port"    # ":8080"
    PID = "pid"      # "4312"
    NAME = "name"    # "nginx"
