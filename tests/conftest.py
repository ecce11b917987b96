import pytest

from fleet_mdm.config import ClassicAPIConfig
from fleet_mdm.connection import ClassicAPIConnection
from fleet_mdm.kinds import TargetKind

from .factories import group_xml, list_xml

BASE_URL = "https://mdm.example.com:8443"
API_URL = f"{BASE_URL}/JSSResource"

ENV_VARS = (
    "FLEET_MDM_URL",
    "FLEET_MDM_USERNAME",
    "FLEET_MDM_PASSWORD",
    "FLEET_MDM_VERIFY_SSL",
    "FLEET_MDM_TIMEOUT",
    "FLEET_MDM_REQUESTS_PER_SECOND",
)


@pytest.fixture(autouse=True)
def del_mdm_env_vars(monkeypatch):
    """Delete environment variables for the API credentials, if they exist."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def set_mdm_env_vars(monkeypatch):
    """Set environment variables for the API credentials to fake values."""
    monkeypatch.setenv("FLEET_MDM_URL", f"{BASE_URL}/")
    monkeypatch.setenv("FLEET_MDM_USERNAME", "test")
    monkeypatch.setenv("FLEET_MDM_PASSWORD", "test")


@pytest.fixture
def config():
    # High enough that the rate limiter never delays a test
    return ClassicAPIConfig(
        base_url=BASE_URL, username="test", password="test", requests_per_second=100
    )


@pytest.fixture
def connection(config):
    return ClassicAPIConnection(config)


@pytest.fixture
def mock_list(requests_mock):
    """Register the list response for a kind of target."""

    def mock(kind: TargetKind, items: list[dict]):
        return requests_mock.get(f"{API_URL}/{kind.list_rsrc}", text=list_xml(kind, items))

    return mock


@pytest.fixture
def mock_group(requests_mock):
    """Register the response for one group and its members."""

    def mock(kind: TargetKind, group_id: int, member_ids: list[int]):
        return requests_mock.get(
            f"{API_URL}/{kind.value}/id/{group_id}", text=group_xml(kind, group_id, member_ids)
        )

    return mock
