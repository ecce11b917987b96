import os

import structlog
from pydantic import BaseModel, SecretStr, field_validator

logger = structlog.getLogger(__name__)

ENV_PREFIX = "FLEET_MDM_"


def get_secret(key):
    """Get a value from the environment."""
    return os.getenv(key)


class ClassicAPIConfig(BaseModel):
    """Model to validate the classic API server configuration."""

    base_url: str
    username: str
    password: SecretStr
    verify_ssl: bool = True
    timeout: float = 60
    requests_per_second: float = 5
    # Only GETs are ever retried
    read_retries: int = 3

    @field_validator("base_url")
    @classmethod
    def always_strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/JSSResource"

    @classmethod
    def from_env(cls) -> "ClassicAPIConfig | None":
        """
        Build a config from FLEET_MDM_* environment variables. Returns None if
        the URL or credentials are not set.

        Example environment:
            export FLEET_MDM_URL="https://mdm.example.com:8443"
            export FLEET_MDM_USERNAME="api-user"
            export FLEET_MDM_PASSWORD="secret"
            export FLEET_MDM_TIMEOUT=30
        """
        required = {
            "base_url": get_secret(f"{ENV_PREFIX}URL"),
            "username": get_secret(f"{ENV_PREFIX}USERNAME"),
            "password": get_secret(f"{ENV_PREFIX}PASSWORD"),
        }
        if not all(required.values()):
            logger.warning("Classic API credentials not configured.")
            return None
        optional = {
            "verify_ssl": get_secret(f"{ENV_PREFIX}VERIFY_SSL"),
            "timeout": get_secret(f"{ENV_PREFIX}TIMEOUT"),
            "requests_per_second": get_secret(f"{ENV_PREFIX}REQUESTS_PER_SECOND"),
        }
        config = cls.model_validate(
            required | {key: value for key, value in optional.items() if value is not None}
        )
        logger.debug("Parsed classic API config", base_url=config.base_url)
        return config
