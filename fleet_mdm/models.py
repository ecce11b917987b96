from pydantic import BaseModel, ConfigDict, Field

from .connection import ClassicAPIConnection
from .errors import NoSuchTarget
from .identifiers import IdentifierIndex
from .kinds import TargetKind
from .mdm.facade import PASSCODE_LENGTH, EndpointCommands, commands_for


class ManagedObject(BaseModel):
    """A computer, mobile device or group known to the server. Command methods
    send the command to this object only (or to this group's members).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: TargetKind
    id: int
    name: str = ""
    connection: ClassicAPIConnection = Field(exclude=True, repr=False)

    def __str__(self):
        return f"{self.name} ({self.id})"

    @classmethod
    def fetch(cls, identifier, connection: ClassicAPIConnection, kind: TargetKind):
        """Look up one object by any of its identifiers."""
        index = IdentifierIndex(connection, kind)
        target_id = index.valid_id(identifier)
        if target_id is None:
            raise NoSuchTarget(identifier, kind)
        data = next(item for item in index.all() if item["id"] == target_id)
        return cls(kind=kind, id=target_id, name=data.get("name", ""), connection=connection)

    @property
    def commands(self) -> EndpointCommands:
        return commands_for(self.kind, self.connection)

    def blank_push(self):
        return self.commands.blank_push(self.id)

    send_blank_push = blank_push
    noop = blank_push

    def device_lock(
        self,
        passcode_or_message: str | None = "",
        passcode: str | None = None,
        lock_message: str | None = None,
    ):
        """Lock this target. A 6 character passcode_or_message is the passcode
        for computers; for mobile devices it is the lock screen message.
        """
        passcode_or_message = passcode_or_message or ""
        if self.commands.is_computer_like:
            if len(passcode_or_message) == PASSCODE_LENGTH:
                passcode = passcode or passcode_or_message
        elif passcode_or_message:
            lock_message = lock_message or passcode_or_message
        return self.commands.device_lock(self.id, passcode=passcode, lock_message=lock_message)

    lock = device_lock
    lock_device = device_lock

    def erase_device(self, passcode: str | None = None, preserve_data_plan: bool = False):
        return self.commands.erase_device(
            self.id, passcode=passcode, preserve_data_plan=preserve_data_plan
        )

    wipe = erase_device
    wipe_device = erase_device
    wipe_computer = erase_device
    erase = erase_device

    def unmanage_device(self):
        return self.commands.unmanage_device(self.id)

    remove_mdm_profile = unmanage_device

    def delete_user(
        self, user_name: str | None = None, force: bool = False, delete_all: bool = False
    ):
        return self.commands.delete_user(self.id, user_name, force=force, delete_all=delete_all)

    def unlock_user_account(self, user_name: str):
        return self.commands.unlock_user_account(self.id, user_name)

    def enable_remote_desktop(self):
        return self.commands.enable_remote_desktop(self.id)

    def disable_remote_desktop(self):
        return self.commands.disable_remote_desktop(self.id)

    def update_inventory(self):
        return self.commands.update_inventory(self.id)

    recon = update_inventory

    def clear_passcode(self, unlock_token: str | None = None):
        return self.commands.clear_passcode(self.id, unlock_token=unlock_token)

    def enable_data_roaming(self):
        return self.commands.enable_data_roaming(self.id)

    def disable_data_roaming(self):
        return self.commands.disable_data_roaming(self.id)

    def enable_voice_roaming(self):
        return self.commands.enable_voice_roaming(self.id)

    def disable_voice_roaming(self):
        return self.commands.disable_voice_roaming(self.id)

    def passcode_lock_grace_period(self, seconds: int):
        return self.commands.passcode_lock_grace_period(self.id, seconds)

    def set_device_name(self, device_name: str):
        return self.commands.set_device_name(self.id, device_name)

    set_name = set_device_name

    def wallpaper(self, wallpaper_setting=None, wallpaper_content=None, wallpaper_id=None):
        return self.commands.wallpaper(
            self.id,
            wallpaper_setting=wallpaper_setting,
            wallpaper_content=wallpaper_content,
            wallpaper_id=wallpaper_id,
        )

    set_wallpaper = wallpaper

    def shut_down_device(self):
        return self.commands.shut_down_device(self.id)

    shutdown_device = shut_down_device
    shut_down = shut_down_device
    shutdown = shut_down_device

    def restart_device(self, rebuild_kernel_cache=False, kext_paths=None, notify_user=None):
        return self.commands.restart_device(
            self.id,
            rebuild_kernel_cache=rebuild_kernel_cache,
            kext_paths=kext_paths,
            notify_user=notify_user,
        )

    restart = restart_device

    def clear_restrictions_password(self):
        return self.commands.clear_restrictions_password(self.id)

    def enable_app_analytics(self):
        return self.commands.enable_app_analytics(self.id)

    def disable_app_analytics(self):
        return self.commands.disable_app_analytics(self.id)

    def enable_diagnostic_submission(self):
        return self.commands.enable_diagnostic_submission(self.id)

    def disable_diagnostic_submission(self):
        return self.commands.disable_diagnostic_submission(self.id)

    def enable_lost_mode(
        self, message=None, phone=None, footnote=None, play_sound=False, enforce_lost_mode=True
    ):
        return self.commands.enable_lost_mode(
            self.id,
            message=message,
            phone=phone,
            footnote=footnote,
            play_sound=play_sound,
            enforce_lost_mode=enforce_lost_mode,
        )

    def disable_lost_mode(self):
        return self.commands.disable_lost_mode(self.id)

    def play_lost_mode_sound(self):
        return self.commands.play_lost_mode_sound(self.id)

    def device_location(self):
        return self.commands.device_location(self.id)

    def flush_commands(self, status: str):
        return self.commands.flush_commands(self.id, status)

    flush_mdm_commands = flush_commands


class Computer(ManagedObject):
    kind: TargetKind = TargetKind.COMPUTERS

    @classmethod
    def fetch(cls, identifier, connection: ClassicAPIConnection):
        return super().fetch(identifier, connection, TargetKind.COMPUTERS)


class ComputerGroup(ManagedObject):
    kind: TargetKind = TargetKind.COMPUTER_GROUPS

    @classmethod
    def fetch(cls, identifier, connection: ClassicAPIConnection):
        return super().fetch(identifier, connection, TargetKind.COMPUTER_GROUPS)

    def member_ids(self) -> list[int]:
        return IdentifierIndex(self.connection, self.kind).member_ids(self.id)


class MobileDevice(ManagedObject):
    kind: TargetKind = TargetKind.MOBILE_DEVICES

    @classmethod
    def fetch(cls, identifier, connection: ClassicAPIConnection):
        return super().fetch(identifier, connection, TargetKind.MOBILE_DEVICES)


class MobileDeviceGroup(ManagedObject):
    kind: TargetKind = TargetKind.MOBILE_DEVICE_GROUPS

    @classmethod
    def fetch(cls, identifier, connection: ClassicAPIConnection):
        return super().fetch(identifier, connection, TargetKind.MOBILE_DEVICE_GROUPS)

    def member_ids(self) -> list[int]:
        return IdentifierIndex(self.connection, self.kind).member_ids(self.id)
