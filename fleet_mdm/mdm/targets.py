import structlog

from fleet_mdm.connection import ClassicAPIConnection
from fleet_mdm.errors import EmptyTargetSet, NoSuchTarget, UnmanagedTarget
from fleet_mdm.identifiers import IdentifierIndex
from fleet_mdm.kinds import TargetKind

logger = structlog.getLogger(__name__)


def as_identifier_list(identifiers) -> list:
    """A single identifier becomes a one element list."""
    if identifiers is None:
        return []
    if isinstance(identifiers, (str, bytes, int)):
        return [identifiers]
    return list(identifiers)


def unique(ids) -> list[int]:
    """Drop later duplicates, keeping first-seen order."""
    return list(dict.fromkeys(ids))


class TargetResolver:
    """Turns the identifiers a caller passes into the ids a command is sent to."""

    def __init__(self, connection: ClassicAPIConnection):
        self.connection = connection

    def resolve(
        self,
        identifiers,
        kind: TargetKind,
        expand_groups: bool = True,
        allow_unmanaged: bool = False,
    ) -> list[int]:
        """
        Resolve identifiers of the given kind into an ordered, duplicate-free
        list of endpoint ids. Group ids are replaced by their members' ids when
        expand_groups is set.

        Resolution is all-or-nothing: one unknown identifier, or (unless
        allow_unmanaged is set) one unmanaged endpoint, fails the whole call.
        """
        identifiers = as_identifier_list(identifiers)
        if not identifiers:
            raise EmptyTargetSet("No targets given")

        # Management status must be read fresh, the server rejects the whole
        # batch if any target is unmanaged
        self.connection.flush_cache(kind.list_key)
        if kind.is_group:
            self.connection.flush_cache(kind.member_kind.list_key)

        index = IdentifierIndex(self.connection, kind)
        target_ids = []
        for identifier in identifiers:
            target_id = index.valid_id(identifier)
            if target_id is None:
                raise NoSuchTarget(identifier, kind)
            target_ids.append(target_id)

        endpoint_kind = kind
        if kind.is_group and expand_groups:
            group_ids = unique(target_ids)
            target_ids = []
            for group_id in group_ids:
                target_ids.extend(index.member_ids(group_id))
            endpoint_kind = kind.member_kind
        target_ids = unique(target_ids)
        if not target_ids:
            raise EmptyTargetSet(f"No {endpoint_kind.value} to send to after expanding groups")

        if not allow_unmanaged and not endpoint_kind.is_group:
            managed = IdentifierIndex(self.connection, endpoint_kind).managed_flags()
            for target_id in target_ids:
                if not managed.get(target_id, False):
                    raise UnmanagedTarget(target_id, endpoint_kind)

        logger.debug(
            "Resolved command targets",
            kind=kind.value,
            identifiers=identifiers,
            target_ids=target_ids,
        )
        return target_ids
