"""Log sanitization and secure logging setup.

SOAP header keys may be plain (``Password``) or Clark-qualified
(``{https://adcenter.microsoft.com/api/adcenter/v9}Password``); both forms
are recognized when redacting.
"""

import copy
import logging
import re
import sys
from typing import Any, Dict

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9_-]+", re.IGNORECASE),
    "api_key": re.compile(r"[A-Za-z0-9]{32,}"),
    "basic_auth": re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.IGNORECASE),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "authenticationtoken",
    "developertoken",
    "password",
    "cookie",
    "set-cookie",
}


def _local_name(key: str) -> str:
    """Strip a ``{namespace}`` prefix from a header key."""
    if key.startswith("{") and "}" in key:
        return key.split("}", 1)[1]
    return key


def sanitize_string(value: str, partial: bool = False) -> str:
    """Sanitize a string containing potential sensitive data.

    :param value: String to sanitize
    :type value: str
    :param partial: If True, show length instead of full redaction
    :type partial: bool
    :return: Sanitized string with sensitive data redacted
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        if pattern.search(value):
            if partial and len(value) > 10:
                return f"<{pattern_name}:length={len(value)}>"
            else:
                return f"<{pattern_name}:REDACTED>"
    return value


def sanitize_url(url: str) -> str:
    """Sanitize URLs that might contain tokens or signatures.

    Only the values of sensitive query parameters and path segments are
    redacted; the rest of the URL is kept for diagnostics.

    :param url: URL to sanitize
    :type url: str
    :return: Sanitized URL with sensitive parameters redacted
    :rtype: str
    """
    if not url:
        return url
    sensitive_params = [
        "token",
        "key",
        "secret",
        "password",
        "sig",
        "access_token",
        "client_secret",
    ]
    for param in sensitive_params:
        patterns = [
            rf"({param}=)[^&\s]+",
            rf"({param}/)[^/\s]+",
        ]
        for pattern in patterns:
            url = re.sub(pattern, r"\1<REDACTED>", url, flags=re.IGNORECASE)
    return url


def sanitize_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize a header mapping for logging.

    :param headers: Header mapping, plain or namespace-qualified keys
    :type headers: Dict[str, Any]
    :return: Copy of the mapping with credentials redacted
    :rtype: Dict[str, Any]
    """
    if not headers:
        return headers
    sanitized = copy.deepcopy(headers)
    for key, value in headers.items():
        lower_key = _local_name(key).lower()
        if lower_key in SENSITIVE_HEADERS:
            if isinstance(value, str) and len(value) > 0:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
    return sanitized


class SanitizingFormatter(logging.Formatter):
    """Formatter that removes sensitive data from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with automatic sanitization.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log message
        :rtype: str
        """
        if record.args:
            try:
                record.msg = sanitize_string(record.msg % record.args)
                record.args = None
            except (TypeError, ValueError):
                # Leave mismatched args alone, only clean the template
                record.msg = sanitize_string(str(record.msg))
        else:
            record.msg = sanitize_string(str(record.msg))
        return super().format(record)


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_secure_logging(level: str = "INFO") -> None:
    """Set up root logging with automatic sanitization.

    Calling it more than once is a no-op.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

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

    # Token refreshes would otherwise log full request lines
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
