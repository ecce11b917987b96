from .facade import (
    ComputerCommands,
    ComputerGroupCommands,
    EndpointCommands,
    MobileDeviceCommands,
    MobileDeviceGroupCommands,
    commands_for,
)
from .service import CommandService

__all__ = [
    "CommandService",
    "ComputerCommands",
    "ComputerGroupCommands",
    "EndpointCommands",
    "MobileDeviceCommands",
    "MobileDeviceGroupCommands",
    "commands_for",
]
