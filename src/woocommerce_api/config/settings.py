"""Configuration settings for the WooCommerce API client.

This module defines the configuration for a client instance: the shop
URL, REST API credentials, API path prefix and version, retry policy
and per-attempt timeout. Settings are loaded from environment variables
and .env files.
"""

import re
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_PATH_PREFIX = "/wp-json/wc/v3"
DEFAULT_API_VERSION = "v3"
DEFAULT_TIMEOUT = 30.0

_API_VERSION_RE = re.compile(r"^v[0-9]+$")


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    :param woocommerce_url: Shop base URL, e.g. ``https://shop.example.com``
    :type woocommerce_url: Optional[str]
    :param consumer_key: REST API consumer key (``ck_...``)
    :type consumer_key: Optional[str]
    :param consumer_secret: REST API consumer secret (``cs_...``)
    :type consumer_secret: Optional[str]
    :param api_path_prefix: Fixed path prefix of the REST API
    :type api_path_prefix: str
    :param api_version: REST API version, ``v`` followed by digits
    :type api_version: str
    :param max_retries: Maximum attempts per call, 0 means a single attempt
    :type max_retries: int
    :param timeout: Per-attempt timeout in seconds (connect + read)
    :type timeout: float
    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
        populate_by_name=True,
    )

    woocommerce_url: Optional[str] = Field(
        None, alias="WOOCOMMERCE_URL", description="Shop base URL"
    )
    consumer_key: Optional[str] = Field(
        None, alias="WOOCOMMERCE_CONSUMER_KEY", description="REST API consumer key"
    )
    consumer_secret: Optional[str] = Field(
        None,
        alias="WOOCOMMERCE_CONSUMER_SECRET",
        description="REST API consumer secret",
    )

    api_path_prefix: str = Field(
        DEFAULT_API_PATH_PREFIX,
        alias="WOOCOMMERCE_API_PATH_PREFIX",
        description="REST API path prefix",
    )
    api_version: str = Field(
        DEFAULT_API_VERSION,
        alias="WOOCOMMERCE_API_VERSION",
        description="REST API version",
    )

    max_retries: int = Field(
        0,
        ge=0,
        alias="WOOCOMMERCE_MAX_RETRIES",
        description="Maximum attempts per call (0 = no retry)",
    )
    timeout: float = Field(
        DEFAULT_TIMEOUT,
        gt=0,
        alias="WOOCOMMERCE_TIMEOUT",
        description="Per-attempt timeout in seconds",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", alias="LOG_LEVEL", description="Logging level"
    )

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Reject versions that are not ``v`` followed by digits.

        :param v: The configured version
        :type v: str
        :return: The version unchanged
        :rtype: str
        :raises ValueError: If the version does not look like ``v3``
        """
        if not _API_VERSION_RE.match(v):
            raise ValueError(f"invalid API version {v!r}, expected e.g. 'v3'")
        return v

    @field_validator("woocommerce_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the shop URL by dropping a trailing slash."""
        if v:
            return v.rstrip("/")
        return v

    @property
    def effective_path_prefix(self) -> str:
        """Get the path prefix with its version segment set to ``api_version``.

        :return: Path prefix such as ``/wp-json/wc/v3``
        :rtype: str
        """
        return with_api_version(self.api_path_prefix, self.api_version)


def with_api_version(path_prefix: str, version: str) -> str:
    """Replace the trailing version segment of a path prefix.

    Prefixes without a trailing version segment are returned unchanged.

    :param path_prefix: Prefix such as ``/wp-json/wc/v3``
    :type path_prefix: str
    :param version: Version such as ``v2``
    :type version: str
    :return: Prefix with the version applied
    :rtype: str
    """
    head, _, last = path_prefix.rstrip("/").rpartition("/")
    if _API_VERSION_RE.match(last):
        return f"{head}/{version}"
    return path_prefix.rstrip("/")


def load_settings(**overrides) -> Settings:
    """Load settings from the environment, applying keyword overrides.

    :return: A fresh settings instance
    :rtype: Settings
    """
    return Settings(**overrides)
