import structlog

from fleet_mdm.connection import ClassicAPIConnection
from fleet_mdm.errors import InvalidOption
from fleet_mdm.kinds import TargetKind

from . import commands
from .builder import build_command_document
from .dispatch import Dispatcher
from .results import normalize
from .targets import TargetResolver

logger = structlog.getLogger(__name__)

PENDING_STATUS = "Pending"
FAILED_STATUS = "Failed"
PENDING_FAILED_STATUS = "Pending+Failed"

FLUSHABLE_STATUSES = {
    "pending": PENDING_STATUS,
    "failed": FAILED_STATUS,
    "pending_failed": PENDING_FAILED_STATUS,
}


class CommandService:
    """Runs the dispatch pipeline: validate the command, resolve the targets,
    build the request, send it and normalize the response.
    """

    def __init__(self, connection: ClassicAPIConnection):
        self.connection = connection
        self.resolver = TargetResolver(connection)
        self.dispatcher = Dispatcher(connection)

    def send_command(
        self,
        targets,
        alias: str,
        kind: TargetKind,
        options: dict | None = None,
        allow_unmanaged: bool = False,
    ) -> dict[int, str]:
        """
        Send the command named by alias to targets of the given kind.

        Returns a dict keyed by endpoint id. For computers the values are
        command uuids, for mobile devices they are status strings such as
        "Command sent".
        """
        endpoint_class = kind.endpoint_class
        command = commands.validate(alias, endpoint_class)
        options = options or {}
        target_ids = self.resolver.resolve(targets, kind, allow_unmanaged=allow_unmanaged)
        document = build_command_document(command, options, target_ids, endpoint_class)
        logger.info(
            "Sending MDM command",
            command=command.name,
            kind=kind.value,
            target_ids=target_ids,
            supervised_only=command.supervised_only,
        )
        response = self.dispatcher.send(document, command, endpoint_class)
        results = normalize(response, command, endpoint_class, target_ids)
        logger.debug("MDM command sent", command=command.name, results=results)
        return results

    def flush_commands(self, targets, kind: TargetKind, status: str):
        """
        Delete pending and/or failed commands queued for targets. status is one
        of "pending", "failed" or "pending_failed". Unmanaged targets are
        allowed here.
        """
        if status not in FLUSHABLE_STATUSES:
            raise InvalidOption(f"Status must be one of: {', '.join(FLUSHABLE_STATUSES)}")
        target_ids = self.resolver.resolve(targets, kind, allow_unmanaged=True)
        ids = ",".join(str(target_id) for target_id in target_ids)
        rsrc = f"commandflush/{kind.member_kind.value}/id/{ids}/status/{FLUSHABLE_STATUSES[status]}"
        logger.info("Flushing MDM commands", kind=kind.value, target_ids=target_ids, status=status)
        return self.dispatcher.delete(rsrc)
