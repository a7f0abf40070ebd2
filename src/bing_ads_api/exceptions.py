"""Structured exception classes for the Bing Ads API client."""

import json
from typing import Any, Dict, Optional


class BingAdsApiError(Exception):
    """Base exception for all Bing Ads API client errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict())


class ConfigurationError(BingAdsApiError):
    """Raised for configuration-related errors.

    Covers unknown or deprecated authentication methods, incomplete
    credentials, unknown versions, services or environments, and header
    builders paired with the wrong authentication strategy. Never retried.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class AuthenticationError(BingAdsApiError):
    """Raised when authentication material cannot be produced.

    :param message: Description of the authentication failure
    :param details: Optional additional context about the failure
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize authentication error with message and optional details."""
        super().__init__(message=message, code="AUTHENTICATION_ERROR", details=details)


class OAuthError(AuthenticationError):
    """Raised when the token endpoint answers with an OAuth error.

    :param message: Description of the OAuth error
    :param error_code: Optional OAuth error code from the provider
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        """Initialize OAuth error with message and optional error code."""
        details = {}
        if error_code:
            details["oauth_error"] = error_code
        super().__init__(message=message, details=details)
        self.code = "OAUTH_ERROR"
        self.error_code = error_code


class TokenError(AuthenticationError):
    """Raised for token-related errors.

    Covers transport failures during refresh and malformed token responses.

    :param message: Description of the token error
    :param token_type: Optional type of token that caused the error
    """

    def __init__(self, message: str, token_type: Optional[str] = None):
        """Initialize token error with message and optional token type."""
        details = {}
        if token_type:
            details["token_type"] = token_type
        super().__init__(message=message, details=details)
        self.code = "TOKEN_ERROR"


class APIError(BingAdsApiError):
    """Raised for API-related errors such as failed report downloads.

    :param message: Description of the API error
    :param status_code: Optional HTTP status code from the API response
    :param response_body: Optional response body from the failed request
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body
