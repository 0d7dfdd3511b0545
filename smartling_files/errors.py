"""
SDK Exceptions
"""

from typing import Optional, Dict, Any, List

BAD_RESPONSE_FORMAT = "Bad response format from Smartling"


class SmartlingApiError(Exception):
    """Base exception for the Smartling Files client."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }


class LocalIOError(SmartlingApiError):
    """Raised when a local file cannot be read for upload or import."""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"File {path} was not able to be read."
        super().__init__(message, "LOCAL_IO_ERROR", None, {"reason": reason} if reason else None)
        self.path = path


class RemoteApiError(SmartlingApiError):
    """Raised when Smartling answers with an error status and a valid error envelope."""

    def __init__(self, status_code: int, errors: List[Dict[str, Any]]):
        message = " || ".join(str(error.get("message", "")) for error in errors)
        super().__init__(message, "REMOTE_API_ERROR", status_code, {"errors": errors})
        self.errors = errors


class MalformedResponseError(SmartlingApiError):
    """Raised when a response body is not the expected JSON envelope."""

    def __init__(
        self,
        message: str = BAD_RESPONSE_FORMAT,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message, "BAD_RESPONSE_FORMAT", status_code)
        self.body = body


class TransportError(SmartlingApiError):
    """Raised when the request could not be delivered."""

    def __init__(self, message: str):
        super().__init__(message, "TRANSPORT_ERROR")


class ConfigurationError(SmartlingApiError):
    """Raised when required client settings are missing."""

    def __init__(self, missing: List[str]):
        super().__init__(
            f"Missing Smartling settings: {', '.join(missing)}",
            "CONFIGURATION_ERROR",
            details={"missing": missing},
        )
        self.missing = missing
