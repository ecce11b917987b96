import copy
from xml.etree import ElementTree

import requests
import structlog

from fleet_mdm.connection import ClassicAPIConnection
from fleet_mdm.errors import TransportError
from fleet_mdm.kinds import EndpointClass

from .builder import GENERAL_ELEMENT, to_xml
from .commands import BLANK_PUSH, Command

logger = structlog.getLogger(__name__)

COMPUTER_COMMANDS_RSRC = "computercommands"
DEVICE_COMMANDS_RSRC = "mobiledevicecommands"

# Options that unlock the target; never written to the log
SECRET_OPTIONS = ("passcode", "unlock_token")
REDACTED = "********"


def command_rsrc(command: Command, endpoint_class: EndpointClass) -> str:
    match endpoint_class:
        case EndpointClass.COMPUTER_LIKE:
            base = COMPUTER_COMMANDS_RSRC
        case EndpointClass.DEVICE_LIKE:
            base = DEVICE_COMMANDS_RSRC
        case _:
            raise AssertionError(f"Unknown endpoint class: {endpoint_class!r}")
    return f"{base}/command/{command.name}"


def redacted(document: ElementTree.Element) -> str:
    """The document as text, with secret option values masked."""
    document = copy.deepcopy(document)
    general = document.find(GENERAL_ELEMENT)
    if general is not None:
        for option in SECRET_OPTIONS:
            for element in general.iter(option):
                element.text = REDACTED
    return ElementTree.tostring(document, encoding="unicode")


class Dispatcher:
    """Sends built documents to the server. Every send is a single attempt;
    retrying a command is up to the caller.
    """

    def __init__(self, connection: ClassicAPIConnection):
        self.connection = connection

    def send(
        self, document: ElementTree.Element, command: Command, endpoint_class: EndpointClass
    ) -> ElementTree.Element | None:
        """POST the document. Returns the parsed response, or None for a blank
        push, whose response body is never read.
        """
        rsrc = command_rsrc(command, endpoint_class)
        logger.debug("Sending command document", rsrc=rsrc, document=redacted(document))
        try:
            return self.connection.post(rsrc, to_xml(document), parse=command != BLANK_PUSH)
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Sending {command} failed", api_error=getattr(e, "api_error", None)
            ) from e

    def delete(self, rsrc: str) -> ElementTree.Element | None:
        logger.debug("Sending DELETE", rsrc=rsrc)
        try:
            return self.connection.delete(rsrc)
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"DELETE {rsrc} failed", api_error=getattr(e, "api_error", None)
            ) from e
