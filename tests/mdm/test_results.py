from xml.etree import ElementTree

import pytest

from fleet_mdm.errors import MalformedResponse
from fleet_mdm.kinds import EndpointClass
from fleet_mdm.mdm import commands, results
from tests.factories import computer_command_xml, mobile_device_command_xml

COMPUTER_RESPONSE = """
<computer_command>
  <command>
    <name>DeviceLock</name>
    <command_uuid>aaaa-1111</command_uuid>
    <computer_id>12</computer_id>
  </command>
  <command>
    <name>DeviceLock</name>
    <command_uuid>bbbb-2222</command_uuid>
    <computer_id>15</computer_id>
  </command>
</computer_command>
"""

DEVICE_RESPONSE = """
<mobile_device_command>
  <general>
    <command>DeviceLock</command>
  </general>
  <mobile_devices>
    <mobile_device><id>3</id><status>Command sent</status></mobile_device>
    <mobile_device><id>8</id><status>Command sent</status></mobile_device>
  </mobile_devices>
</mobile_device_command>
"""


class TestNormalize:
    def test_computer_response(self):
        result = results.normalize(
            ElementTree.fromstring(COMPUTER_RESPONSE),
            commands.DEVICE_LOCK,
            EndpointClass.COMPUTER_LIKE,
            [12, 15],
        )
        assert result == {12: "aaaa-1111", 15: "bbbb-2222"}

    def test_device_response(self):
        result = results.normalize(
            ElementTree.fromstring(DEVICE_RESPONSE),
            commands.DEVICE_LOCK,
            EndpointClass.DEVICE_LIKE,
            [3, 8],
        )
        assert result == {3: "Command sent", 8: "Command sent"}

    def test_blank_push_is_not_parsed(self, mocker):
        """Blank push results are made up from the target ids."""
        parse_computer = mocker.spy(results, "parse_computer_results")
        parse_device = mocker.spy(results, "parse_device_results")
        result = results.normalize(
            None, commands.BLANK_PUSH, EndpointClass.COMPUTER_LIKE, [1, 2, 3]
        )
        assert result == {1: "Command sent", 2: "Command sent", 3: "Command sent"}
        assert not parse_computer.called
        assert not parse_device.called

    @pytest.mark.parametrize(
        "endpoint_class,response",
        [
            (EndpointClass.COMPUTER_LIKE, DEVICE_RESPONSE),
            (EndpointClass.DEVICE_LIKE, COMPUTER_RESPONSE),
        ],
    )
    def test_wrong_shape_fails_loudly(self, endpoint_class, response):
        with pytest.raises(AssertionError):
            results.normalize(
                ElementTree.fromstring(response), commands.DEVICE_LOCK, endpoint_class, [1]
            )

    def test_empty_response(self):
        with pytest.raises(MalformedResponse):
            results.normalize(None, commands.DEVICE_LOCK, EndpointClass.DEVICE_LIKE, [1])

    @pytest.mark.parametrize(
        "record",
        [
            "<command><computer_id>12</computer_id></command>",
            "<command><command_uuid>aaaa</command_uuid></command>",
            "<command><computer_id>x</computer_id><command_uuid>aaaa</command_uuid></command>",
        ],
    )
    def test_incomplete_computer_record(self, record):
        """Broken records are errors, they are not dropped."""
        root = ElementTree.fromstring(f"<computer_command>{record}</computer_command>")
        with pytest.raises(MalformedResponse):
            results.parse_computer_results(root)

    def test_incomplete_device_record(self):
        root = ElementTree.fromstring(
            "<mobile_device_command><mobile_devices>"
            "<mobile_device><id>3</id></mobile_device>"
            "</mobile_devices></mobile_device_command>"
        )
        with pytest.raises(MalformedResponse):
            results.parse_device_results(root)

    def test_device_response_without_list(self):
        root = ElementTree.fromstring("<mobile_device_command><general/></mobile_device_command>")
        with pytest.raises(MalformedResponse):
            results.parse_device_results(root)

    def test_generated_responses(self):
        computer = ElementTree.fromstring(computer_command_xml({1: "u-1", 2: "u-2"}))
        device = ElementTree.fromstring(mobile_device_command_xml({5: "Command sent"}))
        assert results.parse_computer_results(computer) == {1: "u-1", 2: "u-2"}
        assert results.parse_device_results(device) == {5: "Command sent"}
