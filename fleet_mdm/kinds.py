from enum import Enum


class EndpointClass(Enum):
    """The two families of manageable targets. Decides the resource path, the
    legal commands, and the shape of the server's response.
    """

    COMPUTER_LIKE = "computer"
    DEVICE_LIKE = "mobile_device"

    @property
    def label(self) -> str:
        if self is EndpointClass.COMPUTER_LIKE:
            return "computers or computer groups"
        return "mobile devices or mobile device groups"


class TargetKind(Enum):
    """A classic API resource that commands can be addressed through."""

    COMPUTERS = "computers"
    COMPUTER_GROUPS = "computergroups"
    MOBILE_DEVICES = "mobiledevices"
    MOBILE_DEVICE_GROUPS = "mobiledevicegroups"

    @property
    def endpoint_class(self) -> EndpointClass:
        if self in (TargetKind.COMPUTERS, TargetKind.COMPUTER_GROUPS):
            return EndpointClass.COMPUTER_LIKE
        return EndpointClass.DEVICE_LIKE

    @property
    def is_group(self) -> bool:
        return self in (TargetKind.COMPUTER_GROUPS, TargetKind.MOBILE_DEVICE_GROUPS)

    @property
    def member_kind(self) -> "TargetKind":
        """The kind of the endpoints a target of this kind stands for."""
        if self is TargetKind.COMPUTER_GROUPS:
            return TargetKind.COMPUTERS
        if self is TargetKind.MOBILE_DEVICE_GROUPS:
            return TargetKind.MOBILE_DEVICES
        return self

    @property
    def list_rsrc(self) -> str:
        if self is TargetKind.COMPUTERS:
            return "computers/subset/basic"
        return self.value

    @property
    def list_key(self) -> str:
        return _LIST_KEYS[self]

    @property
    def object_key(self) -> str:
        return _OBJECT_KEYS[self]

    @property
    def lookup_keys(self) -> tuple[str, ...]:
        return _LOOKUP_KEYS[self]


_LIST_KEYS = {
    TargetKind.COMPUTERS: "computers",
    TargetKind.COMPUTER_GROUPS: "computer_groups",
    TargetKind.MOBILE_DEVICES: "mobile_devices",
    TargetKind.MOBILE_DEVICE_GROUPS: "mobile_device_groups",
}

_OBJECT_KEYS = {
    TargetKind.COMPUTERS: "computer",
    TargetKind.COMPUTER_GROUPS: "computer_group",
    TargetKind.MOBILE_DEVICES: "mobile_device",
    TargetKind.MOBILE_DEVICE_GROUPS: "mobile_device_group",
}

# Fields, besides the numeric id, that identify a target of each kind
_LOOKUP_KEYS = {
    TargetKind.COMPUTERS: ("name", "udid", "serial_number", "mac_address", "alt_mac_address"),
    TargetKind.COMPUTER_GROUPS: ("name",),
    TargetKind.MOBILE_DEVICES: ("name", "udid", "serial_number", "wifi_mac_address"),
    TargetKind.MOBILE_DEVICE_GROUPS: ("name",),
}
