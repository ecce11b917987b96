from xml.etree import ElementTree

from fleet_mdm.connection import XML_HEADER
from fleet_mdm.errors import EmptyTargetSet
from fleet_mdm.kinds import EndpointClass, TargetKind

from .commands import Command

GENERAL_ELEMENT = "general"
COMMAND_ELEMENT = "command"
TARGET_ID_ELEMENT = "id"

COMPUTER_COMMAND_ELEMENT = "computer_command"
DEVICE_COMMAND_ELEMENT = "mobile_device_command"

# Element name of each item of a list option
LIST_ITEM_ELEMENTS = {"kext_paths": "kext_path"}


def envelope_elements(endpoint_class: EndpointClass) -> tuple[str, str, str]:
    """The root, target list and target element names for an endpoint class."""
    match endpoint_class:
        case EndpointClass.COMPUTER_LIKE:
            kind = TargetKind.COMPUTERS
            root = COMPUTER_COMMAND_ELEMENT
        case EndpointClass.DEVICE_LIKE:
            kind = TargetKind.MOBILE_DEVICES
            root = DEVICE_COMMAND_ELEMENT
        case _:
            raise AssertionError(f"Unknown endpoint class: {endpoint_class!r}")
    return root, kind.list_key, kind.object_key


def option_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_command_document(
    command: Command, options: dict, target_ids: list[int], endpoint_class: EndpointClass
) -> ElementTree.Element:
    """Build the request document for sending command to target_ids.

    Option keys become element names in the general section, in the order
    given. Options set to None are left out. List values get one child
    element per item.
    """
    if not target_ids:
        raise EmptyTargetSet()
    root_name, list_name, target_name = envelope_elements(endpoint_class)

    root = ElementTree.Element(root_name)
    general = ElementTree.SubElement(root, GENERAL_ELEMENT)
    ElementTree.SubElement(general, COMMAND_ELEMENT).text = command.name
    for option, value in (options or {}).items():
        if value is None:
            continue
        element = ElementTree.SubElement(general, str(option))
        if isinstance(value, (list, tuple)):
            item_name = LIST_ITEM_ELEMENTS.get(option, "item")
            for item in value:
                ElementTree.SubElement(element, item_name).text = option_text(item)
        else:
            element.text = option_text(value)

    targets = ElementTree.SubElement(root, list_name)
    for target_id in target_ids:
        target = ElementTree.SubElement(targets, target_name)
        ElementTree.SubElement(target, TARGET_ID_ELEMENT).text = str(target_id)
    return root


def to_xml(document: ElementTree.Element) -> bytes:
    return XML_HEADER + ElementTree.tostring(document, encoding="unicode").encode("utf-8")
