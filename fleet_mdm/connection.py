from functools import cached_property
from xml.etree import ElementTree

import requests
import structlog
from requests.adapters import HTTPAdapter
from requests_ratelimiter import LimiterSession
from urllib3.util.retry import Retry

from .config import ClassicAPIConfig
from .errors import APIError, MalformedResponse, TransportError

logger = structlog.getLogger(__name__)

XML_HEADER = b'<?xml version="1.0" encoding="UTF-8" standalone="no"?>'


class ReadOnlyRetry(Retry):
    def is_retry(self, method: str, status_code: int, has_retry_after: bool = False) -> bool:
        """Never retry anything but GETs. Commands are not safe to send twice."""
        if method.upper() != "GET":
            return False
        return super().is_retry(method, status_code, has_retry_after)


class ClassicAPIConnection:
    """An authenticated connection to the classic (XML) API.

    Also holds the cache of identifier lists used to resolve command targets.
    Entries are keyed by the list key of the resource (e.g. ``computers``) and
    must be flushed with ``flush_cache()`` whenever fresh data is required.
    """

    def __init__(self, config: ClassicAPIConfig | None):
        self.config = config
        self.cache = {}

    def __str__(self):
        return self.config.base_url if self.config else "unconfigured connection"

    @cached_property
    def session(self) -> LimiterSession | None:
        """
        Creates a requests session for the classic API. Should be shared across
        all requests made through this connection to stay under the rate limit.
        """
        if not self.config:
            logger.warning("Classic API connection not configured.")
            return None
        session = LimiterSession(per_second=self.config.requests_per_second)
        session.auth = (self.config.username, self.config.password.get_secret_value())
        session.verify = self.config.verify_ssl
        session.headers.update({"Accept": "application/xml"})

        retries = ReadOnlyRetry(
            total=self.config.read_retries,
            backoff_factor=0.1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            # Don't raise a MaxRetryError if retries are exhausted due to status code;
            # we'll raise a HTTPError using response.raise_for_status() if necessary
            raise_on_status=False,
        )
        session.mount("https://", HTTPAdapter(max_retries=retries))

        return session

    @property
    def is_configured(self):
        return bool(self.session)

    def __bool__(self):
        return self.is_configured

    def url(self, rsrc: str) -> str:
        return f"{self.config.api_url}/{rsrc.lstrip('/')}"

    def request(self, method: str, rsrc: str, *args, **kwargs):
        """Makes a classic API request. In case of an error response, add a api_error
        attribute (an APIError object) to the exception raised by Response.raise_for_status().
        """
        if not self.is_configured:
            raise TransportError("Classic API connection not configured")
        kwargs.setdefault("timeout", self.config.timeout)
        url = self.url(rsrc)
        try:
            response = self.session.request(method, url, *args, **kwargs)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            response = e.response
            error_data = response.text if response is not None and response.text else None
            status_code = getattr(response, "status_code", None)
            e.api_error = APIError(
                method=method, url=url, status_code=status_code, error_data=error_data
            )
            logger.debug("Classic API error", api_error=e.api_error)
            raise
        return response

    @staticmethod
    def parse(response, rsrc: str) -> ElementTree.Element | None:
        """Parse an XML response body. Empty bodies parse to None."""
        if not response.content or not response.content.strip():
            return None
        try:
            return ElementTree.fromstring(response.content)
        except ElementTree.ParseError as e:
            raise MalformedResponse(f"Unparsable XML from {rsrc}: {e}") from e

    def get(self, rsrc: str) -> ElementTree.Element | None:
        return self.parse(self.request("GET", rsrc), rsrc)

    def post(self, rsrc: str, document: bytes, parse: bool = True) -> ElementTree.Element | None:
        """POST an XML document. With parse=False the response body is ignored
        and None is returned.
        """
        response = self.request(
            "POST", rsrc, data=document, headers={"Content-Type": "application/xml"}
        )
        if not parse:
            return None
        return self.parse(response, rsrc)

    def delete(self, rsrc: str) -> ElementTree.Element | None:
        return self.parse(self.request("DELETE", rsrc), rsrc)

    def flush_cache(self, key: str | None = None):
        """Forget cached data for one list key, or for everything."""
        if key is None:
            self.cache.clear()
        else:
            self.cache.pop(key, None)
        logger.debug("Flushed cache", key=key or "all")
