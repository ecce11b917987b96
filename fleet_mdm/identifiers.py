import requests
import structlog

from .connection import ClassicAPIConnection
from .errors import MalformedResponse, TransportError
from .kinds import TargetKind

logger = structlog.getLogger(__name__)

BOOLEAN_FIELDS = {"managed", "supervised", "is_smart"}


def element_to_dict(element) -> dict:
    """Convert a flat summary element (e.g. one <computer> of a list) into a dict."""
    data = {}
    for child in element:
        text = (child.text or "").strip()
        if child.tag == "id":
            data["id"] = int(text)
        elif child.tag in BOOLEAN_FIELDS:
            data[child.tag] = text.lower() == "true"
        else:
            data[child.tag] = text
    return data


class IdentifierIndex:
    """Resolves names, serial numbers, MAC addresses and UDIDs of one kind of
    target to numeric ids, using the list resource of that kind.
    """

    def __init__(self, connection: ClassicAPIConnection, kind: TargetKind):
        self.connection = connection
        self.kind = kind

    def get(self, rsrc: str):
        try:
            return self.connection.get(rsrc)
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Looking up {self.kind.value} failed", api_error=getattr(e, "api_error", None)
            ) from e

    def all(self) -> list[dict]:
        """Summary data for every target of this kind. Cached on the connection."""
        cache_key = self.kind.list_key
        items = self.connection.cache.get(cache_key)
        if items is None:
            root = self.get(self.kind.list_rsrc)
            if root is None or root.tag != cache_key:
                raise MalformedResponse(f"Expected a <{cache_key}> list from {self.kind.list_rsrc}")
            items = [
                element_to_dict(element) for element in root.findall(self.kind.object_key)
            ]
            logger.debug("Loaded identifier list", kind=self.kind.value, count=len(items))
            self.connection.cache[cache_key] = items
        return items

    def valid_id(self, identifier) -> int | None:
        """Return the id of the target matching identifier, or None.

        Ids are tried first; strings are then compared case-insensitively with
        each lookup field in turn.
        """
        if isinstance(identifier, bool):
            return None
        items = self.all()
        if isinstance(identifier, int) or (isinstance(identifier, str) and identifier.isdigit()):
            wanted = int(identifier)
            for item in items:
                if item["id"] == wanted:
                    return wanted
        if not isinstance(identifier, str) or not identifier:
            return None
        wanted = identifier.casefold()
        for key in self.kind.lookup_keys:
            for item in items:
                value = item.get(key)
                if value and value.casefold() == wanted:
                    return item["id"]
        return None

    def managed_flags(self) -> dict[int, bool]:
        if self.kind.is_group:
            raise ValueError(f"{self.kind.value} have no managed flag")
        return {item["id"]: item.get("managed", False) for item in self.all()}

    def member_ids(self, group_id: int) -> list[int]:
        """Current member ids of a group, always fetched fresh."""
        if not self.kind.is_group:
            raise ValueError(f"{self.kind.value} are not groups")
        rsrc = f"{self.kind.value}/id/{group_id}"
        root = self.get(rsrc)
        if root is None or root.tag != self.kind.object_key:
            raise MalformedResponse(f"Expected a <{self.kind.object_key}> from {rsrc}")
        member_kind = self.kind.member_kind
        members = root.find(member_kind.list_key)
        if members is None:
            return []
        ids = []
        for member in members.findall(member_kind.object_key):
            member_id = (member.findtext("id") or "").strip()
            if not member_id.isdigit():
                raise MalformedResponse(f"Group member without a valid id in {rsrc}")
            ids.append(int(member_id))
        logger.debug("Fetched group members", kind=self.kind.value, group_id=group_id, ids=ids)
        return ids
