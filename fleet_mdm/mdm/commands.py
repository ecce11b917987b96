"""The MDM command taxonomy.

Maps the aliases callers use (``"lock"``, ``"wipe"``, ``"recon"``...) to the
canonical command names expected by the classic API, and records which
endpoint classes may receive each command.
"""

from dataclasses import dataclass
from types import MappingProxyType

from fleet_mdm.errors import UnknownCommand, UnsupportedForClass
from fleet_mdm.kinds import EndpointClass

COMPUTERS = frozenset({EndpointClass.COMPUTER_LIKE})
DEVICES = frozenset({EndpointClass.DEVICE_LIKE})
BOTH = COMPUTERS | DEVICES


@dataclass(frozen=True)
class Command:
    name: str
    aliases: frozenset[str]
    endpoint_classes: frozenset[EndpointClass]
    supervised_only: bool = False

    def __str__(self):
        return self.name


def _command(name, aliases, endpoint_classes, supervised_only=False):
    return Command(name, frozenset(aliases), endpoint_classes, supervised_only)


# Both computers & devices
BLANK_PUSH = _command("BlankPush", ["blank_push", "send_blank_push", "noop"], BOTH)
DEVICE_LOCK = _command("DeviceLock", ["device_lock", "lock_device", "lock"], BOTH)
ERASE_DEVICE = _command(
    "EraseDevice", ["erase_device", "wipe_device", "wipe_computer", "wipe", "erase"], BOTH
)
UNMANAGE_DEVICE = _command("UnmanageDevice", ["unmanage_device", "remove_mdm_profile"], BOTH)

# Computers only
DELETE_USER = _command("DeleteUser", ["delete_user"], COMPUTERS)
UNLOCK_USER_ACCOUNT = _command("UnlockUserAccount", ["unlock_user_account"], COMPUTERS)
ENABLE_REMOTE_DESKTOP = _command("EnableRemoteDesktop", ["enable_remote_desktop"], COMPUTERS)
DISABLE_REMOTE_DESKTOP = _command("DisableRemoteDesktop", ["disable_remote_desktop"], COMPUTERS)

# All mobile devices
SETTINGS = _command("Settings", ["settings"], DEVICES)
CLEAR_PASSCODE = _command("ClearPasscode", ["clear_passcode"], DEVICES)
UPDATE_INVENTORY = _command("UpdateInventory", ["update_inventory", "recon"], DEVICES)
ENABLE_DATA_ROAMING = _command("SettingsEnableDataRoaming", ["enable_data_roaming"], DEVICES)
DISABLE_DATA_ROAMING = _command("SettingsDisableDataRoaming", ["disable_data_roaming"], DEVICES)
ENABLE_VOICE_ROAMING = _command("SettingsEnableVoiceRoaming", ["enable_voice_roaming"], DEVICES)
DISABLE_VOICE_ROAMING = _command(
    "SettingsDisableVoiceRoaming", ["disable_voice_roaming"], DEVICES
)
# Shared iPads only
PASSCODE_LOCK_GRACE_PERIOD = _command(
    "PasscodeLockGracePeriod", ["passcode_lock_grace_period"], DEVICES
)

# Supervised mobile devices
WALLPAPER = _command("Wallpaper", ["wallpaper", "set_wallpaper"], DEVICES, True)
DEVICE_NAME = _command("DeviceName", ["device_name", "set_device_name", "set_name"], DEVICES, True)
SHUT_DOWN_DEVICE = _command(
    "ShutDownDevice",
    ["shut_down_device", "shutdown_device", "shut_down", "shutdown"],
    DEVICES,
    True,
)
RESTART_DEVICE = _command("RestartDevice", ["restart_device", "restart"], DEVICES, True)
CLEAR_RESTRICTIONS_PASSWORD = _command(
    "ClearRestrictionsPassword", ["clear_restrictions_password"], DEVICES, True
)
ENABLE_LOST_MODE = _command("EnableLostMode", ["enable_lost_mode"], DEVICES, True)
DISABLE_LOST_MODE = _command("DisableLostMode", ["disable_lost_mode"], DEVICES, True)
DEVICE_LOCATION = _command("DeviceLocation", ["device_location"], DEVICES, True)
PLAY_LOST_MODE_SOUND = _command("PlayLostModeSound", ["play_lost_mode_sound"], DEVICES, True)
ENABLE_APP_ANALYTICS = _command(
    "SettingsEnableAppAnalytics", ["enable_app_analytics"], DEVICES, True
)
DISABLE_APP_ANALYTICS = _command(
    "SettingsDisableAppAnalytics", ["disable_app_analytics"], DEVICES, True
)
ENABLE_DIAGNOSTIC_SUBMISSION = _command(
    "SettingsEnableDiagnosticSubmission", ["enable_diagnostic_submission"], DEVICES, True
)
DISABLE_DIAGNOSTIC_SUBMISSION = _command(
    "SettingsDisableDiagnosticSubmission", ["disable_diagnostic_submission"], DEVICES, True
)

ALL_COMMANDS = (
    BLANK_PUSH,
    DEVICE_LOCK,
    ERASE_DEVICE,
    UNMANAGE_DEVICE,
    DELETE_USER,
    UNLOCK_USER_ACCOUNT,
    ENABLE_REMOTE_DESKTOP,
    DISABLE_REMOTE_DESKTOP,
    SETTINGS,
    CLEAR_PASSCODE,
    UPDATE_INVENTORY,
    ENABLE_DATA_ROAMING,
    DISABLE_DATA_ROAMING,
    ENABLE_VOICE_ROAMING,
    DISABLE_VOICE_ROAMING,
    PASSCODE_LOCK_GRACE_PERIOD,
    WALLPAPER,
    DEVICE_NAME,
    SHUT_DOWN_DEVICE,
    RESTART_DEVICE,
    CLEAR_RESTRICTIONS_PASSWORD,
    ENABLE_LOST_MODE,
    DISABLE_LOST_MODE,
    DEVICE_LOCATION,
    PLAY_LOST_MODE_SOUND,
    ENABLE_APP_ANALYTICS,
    DISABLE_APP_ANALYTICS,
    ENABLE_DIAGNOSTIC_SUBMISSION,
    DISABLE_DIAGNOSTIC_SUBMISSION,
)


def _build_registry(commands):
    registry = {}
    for command in commands:
        for alias in command.aliases:
            if alias in registry:
                raise ValueError(f"Alias '{alias}' is defined more than once")
            registry[alias] = command
    return MappingProxyType(registry)


COMMANDS = _build_registry(ALL_COMMANDS)


def canonicalize(alias: str) -> Command:
    """Return the command for an alias. Lookup is exact and case-sensitive."""
    try:
        return COMMANDS[alias]
    except (KeyError, TypeError):
        raise UnknownCommand(alias) from None


def legal_for(command: Command, endpoint_class: EndpointClass) -> bool:
    return endpoint_class in command.endpoint_classes


def validate(alias: str, endpoint_class: EndpointClass) -> Command:
    """Return the command for an alias if it can be sent to endpoint_class."""
    command = canonicalize(alias)
    if not legal_for(command, endpoint_class):
        raise UnsupportedForClass(command, endpoint_class)
    return command
