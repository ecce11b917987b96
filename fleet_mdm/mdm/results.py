"""Turns the server's two response shapes into one ``{endpoint id: outcome}`` map.

Computer commands answer with one record per computer carrying the uuid of the
command created for it. Mobile device commands answer with a status string per
device. The outcome type therefore depends on the endpoint class.
"""

from xml.etree import ElementTree

from fleet_mdm.errors import MalformedResponse
from fleet_mdm.kinds import EndpointClass

from .builder import COMPUTER_COMMAND_ELEMENT, DEVICE_COMMAND_ELEMENT, GENERAL_ELEMENT
from .commands import BLANK_PUSH, Command

BLANK_PUSH_RESULT = "Command sent"

COMPUTER_ID_ELEMENT = "computer_id"
COMPUTER_COMMAND_UUID_ELEMENT = "command_uuid"

DEVICE_LIST_ELEMENT = "mobile_devices"
DEVICE_ELEMENT = "mobile_device"
DEVICE_ID_ELEMENT = "id"
DEVICE_STATUS_ELEMENT = "status"


def _required_text(record: ElementTree.Element, tag: str) -> str:
    text = record.findtext(tag)
    if text is None or not text.strip():
        raise MalformedResponse(f"<{record.tag}> record without <{tag}>")
    return text.strip()


def _required_id(record: ElementTree.Element, tag: str) -> int:
    text = _required_text(record, tag)
    try:
        return int(text)
    except ValueError:
        raise MalformedResponse(f"<{tag}> is not numeric: {text!r}") from None


def blank_push_results(target_ids: list[int]) -> dict[int, str]:
    return {target_id: BLANK_PUSH_RESULT for target_id in target_ids}


def parse_computer_results(root: ElementTree.Element) -> dict[int, str]:
    if root.tag != COMPUTER_COMMAND_ELEMENT:
        raise AssertionError(f"Not a computer command response: <{root.tag}>")
    results = {}
    for record in root:
        if record.tag == GENERAL_ELEMENT:
            continue
        results[_required_id(record, COMPUTER_ID_ELEMENT)] = _required_text(
            record, COMPUTER_COMMAND_UUID_ELEMENT
        )
    return results


def parse_device_results(root: ElementTree.Element) -> dict[int, str]:
    if root.tag != DEVICE_COMMAND_ELEMENT:
        raise AssertionError(f"Not a mobile device command response: <{root.tag}>")
    devices = root.find(DEVICE_LIST_ELEMENT)
    if devices is None:
        raise MalformedResponse(f"<{root.tag}> without <{DEVICE_LIST_ELEMENT}>")
    return {
        _required_id(record, DEVICE_ID_ELEMENT): _required_text(record, DEVICE_STATUS_ELEMENT)
        for record in devices.findall(DEVICE_ELEMENT)
    }


def normalize(
    response: ElementTree.Element | None,
    command: Command,
    endpoint_class: EndpointClass,
    target_ids: list[int],
) -> dict[int, str]:
    if command == BLANK_PUSH:
        # Nothing useful per target in this response
        return blank_push_results(target_ids)
    if response is None:
        raise MalformedResponse(f"Empty response to {command}")
    match endpoint_class:
        case EndpointClass.COMPUTER_LIKE:
            return parse_computer_results(response)
        case EndpointClass.DEVICE_LIKE:
            return parse_device_results(response)
        case _:
            raise AssertionError(f"Unknown endpoint class: {endpoint_class!r}")
