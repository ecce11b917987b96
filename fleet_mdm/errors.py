from typing import Any

from pydantic import BaseModel


class APIError(BaseModel):
    method: str | None = None
    url: str
    status_code: int | None = None
    error_data: Any = None

    def __str__(self):
        error = f"Status {self.status_code}"
        if self.error_data:
            error += f": {self.error_data}"
        return error


class MDMCommandError(Exception):
    """Base class for every error raised while dispatching an MDM command."""


class UnknownCommand(MDMCommandError):
    def __init__(self, alias):
        self.alias = alias
        super().__init__(f"Unknown command '{alias}'")


class UnsupportedForClass(MDMCommandError):
    def __init__(self, command, endpoint_class):
        self.command = command
        self.endpoint_class = endpoint_class
        super().__init__(f"'{command}' cannot be sent to {endpoint_class.label}")


class NoSuchTarget(MDMCommandError):
    def __init__(self, identifier, kind=None):
        self.identifier = identifier
        self.kind = kind
        where = f" in {kind.value}" if kind is not None else ""
        super().__init__(f"No target{where} matches identifier: {identifier}")


class EmptyTargetSet(MDMCommandError):
    def __init__(self, message="Targets cannot be empty"):
        super().__init__(message)


class UnmanagedTarget(MDMCommandError):
    def __init__(self, target_id, kind=None):
        self.target_id = target_id
        self.kind = kind
        what = kind.value if kind is not None else "Target"
        super().__init__(f"{what} with id {target_id} is not managed. Cannot send command.")


class MissingOption(MDMCommandError):
    def __init__(self, option, message=None):
        self.option = option
        super().__init__(message or f"Missing required option '{option}'")


class InvalidOption(MDMCommandError, ValueError):
    pass


class TransportError(MDMCommandError):
    """A network or HTTP failure while talking to the server. The state of the
    command on the server is unknown after one of these.
    """

    def __init__(self, message, api_error: APIError | None = None):
        self.api_error = api_error
        if api_error is not None:
            message = f"{message} ({api_error})"
        super().__init__(message)


class MalformedResponse(MDMCommandError):
    pass
