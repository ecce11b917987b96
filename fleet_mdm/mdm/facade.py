import base64
from abc import ABC, abstractproperty
from pathlib import Path

from fleet_mdm.connection import ClassicAPIConnection
from fleet_mdm.errors import InvalidOption, MissingOption
from fleet_mdm.kinds import EndpointClass, TargetKind

from . import commands
from .service import CommandService

PASSCODE_LENGTH = 6

WALLPAPER_LOCATIONS = {
    "lock_screen": 1,
    "home_screen": 2,
    "lock_and_home_screen": 3,
}


def require(value, option: str):
    if value is None or value == "":
        raise MissingOption(option)
    return value


def require_passcode(passcode):
    require(passcode, "passcode")
    if not isinstance(passcode, str) or len(passcode) != PASSCODE_LENGTH:
        raise MissingOption(
            "passcode", f"Computers require a {PASSCODE_LENGTH}-character String passcode"
        )
    return passcode


class EndpointCommands(ABC):
    """Sends MDM commands to one or more targets of one kind without fetching them.

    targets can be an id, a name (or for endpoints a serial number, MAC
    address or UDID), or a list of those. For group kinds the targets are
    groups, and the command goes to their current members.

    Every method returns a dict keyed by endpoint id. Computer values are the
    uuid of the command sent to that computer; mobile device values are the
    status of the command for that device, usually "Command sent".
    """

    def __init__(self, connection: ClassicAPIConnection):
        self.connection = connection
        self.service = CommandService(connection)

    @abstractproperty
    def kind(self) -> TargetKind:
        pass

    @property
    def endpoint_class(self) -> EndpointClass:
        return self.kind.endpoint_class

    @property
    def is_computer_like(self) -> bool:
        return self.endpoint_class is EndpointClass.COMPUTER_LIKE

    def check(self, alias: str):
        """Fail early if this command can't go to this kind of target."""
        commands.validate(alias, self.endpoint_class)

    def send_command(self, targets, alias: str, **options):
        return self.service.send_command(targets, alias, self.kind, options)

    # Computers and mobile devices

    def blank_push(self, targets):
        return self.send_command(targets, "blank_push")

    send_blank_push = blank_push
    noop = blank_push

    def device_lock(self, targets, passcode: str | None = None, lock_message: str | None = None):
        """Lock the targets. Computers need a 6 character passcode, mobile
        devices take an optional message to show on the lock screen.
        """
        self.check("device_lock")
        if self.is_computer_like:
            return self.send_command(targets, "device_lock", passcode=require_passcode(passcode))
        return self.send_command(targets, "device_lock", lock_message=lock_message or None)

    lock = device_lock
    lock_device = device_lock

    def erase_device(
        self, targets, passcode: str | None = None, preserve_data_plan: bool = False
    ):
        self.check("erase_device")
        if self.is_computer_like:
            return self.send_command(targets, "erase_device", passcode=require_passcode(passcode))
        # Only sent when true
        return self.send_command(
            targets, "erase_device", preserve_data_plan=preserve_data_plan or None
        )

    wipe = erase_device
    wipe_device = erase_device
    wipe_computer = erase_device
    erase = erase_device

    def unmanage_device(self, targets):
        return self.send_command(targets, "unmanage_device")

    remove_mdm_profile = unmanage_device

    # Computers only

    def delete_user(
        self,
        targets,
        user_name: str | None = None,
        force: bool = False,
        delete_all: bool = False,
    ):
        """Delete a user account, or every account with delete_all. force deletes
        accounts that are logged in.
        """
        self.check("delete_user")
        if not delete_all:
            require(user_name, "user_name")
        return self.send_command(
            targets,
            "delete_user",
            user_name=user_name or None,
            force_deletion=force,
            delete_all_users=delete_all,
        )

    def unlock_user_account(self, targets, user_name: str):
        self.check("unlock_user_account")
        return self.send_command(
            targets, "unlock_user_account", user_name=require(user_name, "user_name")
        )

    def enable_remote_desktop(self, targets):
        return self.send_command(targets, "enable_remote_desktop")

    def disable_remote_desktop(self, targets):
        return self.send_command(targets, "disable_remote_desktop")

    # Mobile devices

    def update_inventory(self, targets):
        return self.send_command(targets, "update_inventory")

    recon = update_inventory

    def clear_passcode(self, targets, unlock_token: str | None = None):
        self.check("clear_passcode")
        if unlock_token is not None and (not isinstance(unlock_token, str) or not unlock_token):
            raise InvalidOption("unlock_token must be a non-empty string")
        return self.send_command(targets, "clear_passcode", unlock_token=unlock_token)

    def enable_data_roaming(self, targets):
        return self.send_command(targets, "enable_data_roaming")

    def disable_data_roaming(self, targets):
        return self.send_command(targets, "disable_data_roaming")

    def enable_voice_roaming(self, targets):
        return self.send_command(targets, "enable_voice_roaming")

    def disable_voice_roaming(self, targets):
        return self.send_command(targets, "disable_voice_roaming")

    def passcode_lock_grace_period(self, targets, seconds: int):
        """Shared iPads only."""
        self.check("passcode_lock_grace_period")
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise InvalidOption("seconds must be a non-negative integer")
        return self.send_command(
            targets, "passcode_lock_grace_period", passcode_lock_grace_period=seconds
        )

    # Supervised mobile devices

    def set_device_name(self, targets, device_name: str):
        self.check("set_device_name")
        return self.send_command(
            targets, "set_device_name", device_name=require(device_name, "device_name")
        )

    device_name = set_device_name
    set_name = set_device_name

    def wallpaper(
        self,
        targets,
        wallpaper_setting: str | None = None,
        wallpaper_content: str | Path | None = None,
        wallpaper_id: int | None = None,
    ):
        """
        Set the wallpaper on the lock screen, home screen or both.

        wallpaper_setting is one of "lock_screen", "home_screen" or
        "lock_and_home_screen". Provide either wallpaper_id, the id of an
        icon already on the server, or wallpaper_content, the path to a local
        image file.
        """
        self.check("wallpaper")
        if wallpaper_setting not in WALLPAPER_LOCATIONS:
            raise InvalidOption(
                f"wallpaper_setting must be one of: {', '.join(WALLPAPER_LOCATIONS)}"
            )
        options = {"wallpaper_setting": WALLPAPER_LOCATIONS[wallpaper_setting]}
        if wallpaper_content:
            path = Path(wallpaper_content)
            if not path.is_file():
                raise InvalidOption(f"Not a file: {path}")
            options["wallpaper_content"] = base64.b64encode(path.read_bytes()).decode("ascii")
        elif wallpaper_id is not None:
            options["wallpaper_id"] = wallpaper_id
        else:
            raise MissingOption(
                "wallpaper_id", "Either wallpaper_id or wallpaper_content must be provided"
            )
        return self.send_command(targets, "wallpaper", **options)

    set_wallpaper = wallpaper

    def shut_down_device(self, targets):
        return self.send_command(targets, "shut_down_device")

    shutdown_device = shut_down_device
    shut_down = shut_down_device
    shutdown = shut_down_device

    def restart_device(
        self,
        targets,
        rebuild_kernel_cache: bool = False,
        kext_paths: list[str] | None = None,
        notify_user: bool | None = None,
    ):
        """Restart the targets. Options left at their defaults are not sent, so
        the server's defaults apply.
        """
        self.check("restart_device")
        if kext_paths is not None and (
            not isinstance(kext_paths, (list, tuple))
            or not all(isinstance(path, str) for path in kext_paths)
        ):
            raise InvalidOption("kext_paths must be a list of strings")
        return self.send_command(
            targets,
            "restart_device",
            rebuild_kernel_cache=rebuild_kernel_cache or None,
            kext_paths=list(kext_paths) if kext_paths else None,
            notify_user=notify_user,
        )

    restart = restart_device

    def clear_restrictions_password(self, targets):
        return self.send_command(targets, "clear_restrictions_password")

    def enable_app_analytics(self, targets):
        return self.send_command(targets, "enable_app_analytics")

    def disable_app_analytics(self, targets):
        return self.send_command(targets, "disable_app_analytics")

    def enable_diagnostic_submission(self, targets):
        return self.send_command(targets, "enable_diagnostic_submission")

    def disable_diagnostic_submission(self, targets):
        return self.send_command(targets, "disable_diagnostic_submission")

    def enable_lost_mode(
        self,
        targets,
        message: str | None = None,
        phone: str | None = None,
        footnote: str | None = None,
        play_sound: bool = False,
        enforce_lost_mode: bool = True,
    ):
        """Enable lost mode. A message or a phone number must be given."""
        self.check("enable_lost_mode")
        if not (message or phone):
            raise MissingOption("message", "Either message or phone must be provided")
        return self.send_command(
            targets,
            "enable_lost_mode",
            always_enforce_lost_mode=enforce_lost_mode,
            lost_mode_with_sound=play_sound,
            lost_mode_message=message or None,
            lost_mode_phone=phone or None,
            lost_mode_footnote=footnote or None,
        )

    def disable_lost_mode(self, targets):
        return self.send_command(targets, "disable_lost_mode")

    def play_lost_mode_sound(self, targets):
        return self.send_command(targets, "play_lost_mode_sound")

    def device_location(self, targets):
        return self.send_command(targets, "device_location")

    # Maintenance

    def flush_commands(self, targets, status: str):
        """Delete "pending", "failed" or "pending_failed" commands for targets,
        managed or not.
        """
        return self.service.flush_commands(targets, self.kind, status)

    flush_mdm_commands = flush_commands


class ComputerCommands(EndpointCommands):
    kind = TargetKind.COMPUTERS


class ComputerGroupCommands(EndpointCommands):
    kind = TargetKind.COMPUTER_GROUPS


class MobileDeviceCommands(EndpointCommands):
    kind = TargetKind.MOBILE_DEVICES


class MobileDeviceGroupCommands(EndpointCommands):
    kind = TargetKind.MOBILE_DEVICE_GROUPS


COMMANDS_BY_KIND = {
    facade.kind: facade
    for facade in (
        ComputerCommands,
        ComputerGroupCommands,
        MobileDeviceCommands,
        MobileDeviceGroupCommands,
    )
}


def commands_for(kind: TargetKind, connection: ClassicAPIConnection) -> EndpointCommands:
    return COMMANDS_BY_KIND[kind](connection)
