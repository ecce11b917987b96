import pytest
import requests
from requests_ratelimiter import LimiterSession

from fleet_mdm.connection import ClassicAPIConnection, ReadOnlyRetry
from fleet_mdm.errors import MalformedResponse, TransportError
from tests.conftest import API_URL


class TestClassicAPIConnection:
    def test_not_configured(self):
        connection = ClassicAPIConnection(None)
        assert connection.session is None
        assert not connection.is_configured
        assert not connection

    def test_not_configured_request(self):
        with pytest.raises(TransportError):
            ClassicAPIConnection(None).get("computers/subset/basic")

    def test_configured(self, connection):
        assert isinstance(connection.session, LimiterSession)
        assert connection.session.auth == ("test", "test")
        assert connection.session.headers["Accept"] == "application/xml"
        assert connection
        assert str(connection) == "https://mdm.example.com:8443"

    def test_url(self, connection):
        assert connection.url("/computers") == f"{API_URL}/computers"

    def test_get(self, connection, requests_mock):
        requests_mock.get(
            f"{API_URL}/computergroups", text="<computer_groups><size>0</size></computer_groups>"
        )
        assert connection.get("computergroups").tag == "computer_groups"

    def test_empty_body(self, connection, requests_mock):
        requests_mock.delete(f"{API_URL}/commandflush/computers/id/1/status/Failed", text="")
        assert connection.delete("commandflush/computers/id/1/status/Failed") is None

    def test_unparsable_body(self, connection, requests_mock):
        requests_mock.get(f"{API_URL}/computers/subset/basic", text="<computers><oops>")
        with pytest.raises(MalformedResponse):
            connection.get("computers/subset/basic")

    def test_error_has_api_error(self, connection, requests_mock):
        requests_mock.get(f"{API_URL}/computers/subset/basic", status_code=401, text="Unauthorized")
        with pytest.raises(requests.exceptions.HTTPError) as exc_info:
            connection.get("computers/subset/basic")
        api_error = exc_info.value.api_error
        assert api_error.status_code == 401
        assert api_error.url == f"{API_URL}/computers/subset/basic"
        assert str(api_error) == "Status 401: Unauthorized"

    def test_post_without_parsing(self, connection, requests_mock):
        request = requests_mock.post(
            f"{API_URL}/computercommands/command/BlankPush", status_code=201, text="OK"
        )
        assert connection.post("computercommands/command/BlankPush", b"<x/>", parse=False) is None
        assert request.called_once

    def test_flush_cache(self, connection):
        connection.cache.update({"computers": [], "mobile_devices": []})
        connection.flush_cache("computers")
        assert list(connection.cache) == ["mobile_devices"]
        connection.flush_cache("never_cached")
        connection.flush_cache()
        assert connection.cache == {}


class TestReadOnlyRetry:
    @pytest.mark.parametrize("method", ["POST", "DELETE", "PUT", "post"])
    def test_writes_never_retried(self, method):
        retry = ReadOnlyRetry(total=3, status_forcelist=[429, 500, 503])
        assert not retry.is_retry(method, 503)
        assert not retry.is_retry(method, 429, has_retry_after=True)

    def test_gets_retried(self):
        retry = ReadOnlyRetry(total=3, status_forcelist=[429, 500, 503])
        assert retry.is_retry("GET", 503)
        assert not retry.is_retry("GET", 404)
