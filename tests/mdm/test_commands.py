import pytest

from fleet_mdm.errors import UnknownCommand, UnsupportedForClass
from fleet_mdm.kinds import EndpointClass
from fleet_mdm.mdm import commands


class TestRegistry:
    @pytest.mark.parametrize("alias", sorted(commands.COMMANDS))
    def test_canonicalize_is_stable(self, alias):
        """Every alias always maps to the same command, and that command lists the alias."""
        command = commands.canonicalize(alias)
        assert commands.canonicalize(alias) is command
        assert alias in command.aliases

    @pytest.mark.parametrize(
        "alias,name",
        [
            ("lock", "DeviceLock"),
            ("lock_device", "DeviceLock"),
            ("device_lock", "DeviceLock"),
            ("wipe", "EraseDevice"),
            ("wipe_computer", "EraseDevice"),
            ("noop", "BlankPush"),
            ("recon", "UpdateInventory"),
            ("shutdown", "ShutDownDevice"),
            ("remove_mdm_profile", "UnmanageDevice"),
            ("enable_data_roaming", "SettingsEnableDataRoaming"),
            ("set_wallpaper", "Wallpaper"),
        ],
    )
    def test_canonical_names(self, alias, name):
        assert commands.canonicalize(alias).name == name

    @pytest.mark.parametrize("alias", ["Lock", "LOCK", "DeviceLock", "lock ", "", "selfdestruct"])
    def test_unknown_alias(self, alias):
        """Lookup is exact and case-sensitive."""
        with pytest.raises(UnknownCommand):
            commands.canonicalize(alias)

    def test_unhashable_alias(self):
        with pytest.raises(UnknownCommand):
            commands.canonicalize(["lock"])

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            commands.COMMANDS["lock"] = commands.BLANK_PUSH

    def test_every_command_has_an_endpoint_class(self):
        for command in commands.ALL_COMMANDS:
            assert command.endpoint_classes
            assert command.aliases

    @pytest.mark.parametrize(
        "command", [commands.BLANK_PUSH, commands.DEVICE_LOCK, commands.ERASE_DEVICE]
    )
    def test_shared_commands_are_legal_for_both(self, command):
        assert commands.legal_for(command, EndpointClass.COMPUTER_LIKE)
        assert commands.legal_for(command, EndpointClass.DEVICE_LIKE)

    def test_computer_only_command(self):
        assert commands.legal_for(commands.DELETE_USER, EndpointClass.COMPUTER_LIKE)
        assert not commands.legal_for(commands.DELETE_USER, EndpointClass.DEVICE_LIKE)

    def test_device_only_command(self):
        assert commands.legal_for(commands.ENABLE_LOST_MODE, EndpointClass.DEVICE_LIKE)
        assert not commands.legal_for(commands.ENABLE_LOST_MODE, EndpointClass.COMPUTER_LIKE)

    def test_validate_unsupported_for_class(self):
        """A known command sent to the wrong class is not reported as unknown."""
        with pytest.raises(UnsupportedForClass) as exc_info:
            commands.validate("delete_user", EndpointClass.DEVICE_LIKE)
        assert exc_info.value.command is commands.DELETE_USER
        assert "mobile devices" in str(exc_info.value)

    def test_validate_unknown(self):
        with pytest.raises(UnknownCommand):
            commands.validate("self_destruct", EndpointClass.COMPUTER_LIKE)

    def test_validate_returns_command(self):
        assert commands.validate("lock", EndpointClass.COMPUTER_LIKE) is commands.DEVICE_LOCK
