"""Exceptions raised by the backend client.

The controller catches these at each operation boundary and turns them into
view messages, so none of them reach the page.
"""

from typing import Any, Dict, Optional


class BookCatalogError(Exception):
    """Base class for client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(BookCatalogError):
    """Invalid configuration value."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "CONFIG_ERROR", {"config_key": config_key, **kwargs})


class NetworkError(BookCatalogError):
    """The request never completed."""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "NETWORK_ERROR", {"url": url, **kwargs})


class MalformedResponseError(NetworkError):
    """A 2xx response whose body could not be decoded into the expected shape."""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, url=url, **kwargs)
        self.error_code = "MALFORMED_RESPONSE"


class BackendError(BookCatalogError):
    """Non-2xx response other than an authorization failure."""

    def __init__(self, message: str, status_code: int, text: str = "", url: Optional[str] = None) -> None:
        super().__init__(message, "BACKEND_ERROR", {"status_code": status_code, "url": url})
        self.status_code = status_code
        self.text = text


class AuthorizationError(BackendError):
    """401 or 403: the session is no longer valid."""

    def __init__(self, status_code: int, text: str = "", url: Optional[str] = None) -> None:
        super().__init__("Authorization failed", status_code, text=text, url=url)
        self.error_code = "AUTHORIZATION_ERROR"
