from .config import ClassicAPIConfig
from .connection import ClassicAPIConnection
from .errors import (
    APIError,
    EmptyTargetSet,
    InvalidOption,
    MalformedResponse,
    MDMCommandError,
    MissingOption,
    NoSuchTarget,
    TransportError,
    UnknownCommand,
    UnmanagedTarget,
    UnsupportedForClass,
)
from .kinds import EndpointClass, TargetKind
from .models import Computer, ComputerGroup, MobileDevice, MobileDeviceGroup

__all__ = [
    "APIError",
    "ClassicAPIConfig",
    "ClassicAPIConnection",
    "Computer",
    "ComputerGroup",
    "EmptyTargetSet",
    "EndpointClass",
    "InvalidOption",
    "MalformedResponse",
    "MDMCommandError",
    "MissingOption",
    "MobileDevice",
    "MobileDeviceGroup",
    "NoSuchTarget",
    "TargetKind",
    "TransportError",
    "UnknownCommand",
    "UnmanagedTarget",
    "UnsupportedForClass",
    "get_connection",
]


def get_connection():
    """A connection configured from the FLEET_MDM_* environment variables."""
    return ClassicAPIConnection(ClassicAPIConfig.from_env())
