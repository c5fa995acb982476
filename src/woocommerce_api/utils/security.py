"""Secure logging utilities.

This module keeps credentials out of log output:
- URL and header redaction helpers used by the HTTP layer
- A sanitizing formatter and one-shot logging setup for applications
"""

import copy
import logging
import re
import sys
from typing import Any, Dict, Mapping, Optional

from ..config.settings import load_settings

# Query parameters whose values must never be logged
SENSITIVE_PARAMS = (
    "consumer_key",
    "consumer_secret",
    "oauth_consumer_key",
    "oauth_signature",
    "oauth_nonce",
    "password",
    "token",
)

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-wp-nonce",
}

_PARAM_PATTERNS = [
    re.compile(rf"(?<![A-Za-z_])({param}=)[^&\s#]+", re.IGNORECASE)
    for param in SENSITIVE_PARAMS
]

_SECRET_PATTERNS = {
    "consumer_key": re.compile(r"\bck_[A-Za-z0-9]{16,}"),
    "consumer_secret": re.compile(r"\bcs_[A-Za-z0-9]{16,}"),
    "oauth_header": re.compile(r"OAuth\s+oauth_[^\r\n]+", re.IGNORECASE),
}


def sanitize_string(value: str) -> str:
    """Redact key-shaped secrets found anywhere in a string.

    :param value: String to sanitize
    :type value: str
    :return: String with consumer keys, secrets and OAuth headers masked
    :rtype: str
    """
    if not value:
        return value
    for name, pattern in _SECRET_PATTERNS.items():
        value = pattern.sub(f"<{name}:REDACTED>", value)
    return value


def sanitize_url(url: str) -> str:
    """Mask credential query parameters in a URL.

    :param url: URL to sanitize
    :type url: str
    :return: URL with sensitive parameter values replaced by ``<REDACTED>``
    :rtype: str
    """
    if not url:
        return url
    for pattern in _PARAM_PATTERNS:
        url = pattern.sub(r"\1<REDACTED>", url)
    return url


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Sanitize HTTP headers for logging.

    :param headers: HTTP headers
    :type headers: Mapping[str, Any]
    :return: Copy of the headers with sensitive values redacted
    :rtype: Dict[str, Any]
    """
    sanitized = copy.deepcopy(dict(headers))
    for key, value in sanitized.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and value:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
    return sanitized


def log_request(
    method: str, url: str, headers: Mapping[str, Any], logger: logging.Logger
) -> None:
    """Log an outgoing request at DEBUG with credentials redacted.

    :param method: HTTP method
    :type method: str
    :param url: Request URL as sent, credentials included
    :type url: str
    :param headers: Request headers as sent
    :type headers: Mapping[str, Any]
    :param logger: Logger instance to use
    :type logger: logging.Logger
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("SEND %s %s", method, sanitize_url(url))
    logger.debug("Headers: %s", sanitize_headers(headers))


class SanitizingFormatter(logging.Formatter):
    """Formatter that masks credentials in the rendered message."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, then sanitize the rendered message.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log line
        :rtype: str
        """
        return sanitize_url(sanitize_string(super().format(record)))


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_secure_logging(level: Optional[str] = None) -> None:
    """Set up root logging with automatic sanitization.

    Only the first call has an effect. The library itself never calls
    this; applications opt in.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
                  defaults to the ``LOG_LEVEL`` setting
    :type level: Optional[str]
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    if level is None:
        level = load_settings().log_level

    formatter = SanitizingFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,
    )

    # httpx logs full request URLs at INFO, which would include credentials
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
