"""
Annotation error types.

All errors inherit from AnnotationError for easy catching.
Each concrete class is a sentinel that callers branch on; the ErrorKind
groups them by failure mode (missing, malformed, bad value, empty).
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure mode of an annotation resolution."""
    
    NOT_FOUND = "not_found"
    MALFORMED_PAYLOAD = "malformed_payload"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    NO_USABLE_FIELD = "no_usable_field"


class AnnotationError(Exception):
    """Base exception for all annotation resolution failures."""
    
    kind: ErrorKind = ErrorKind.MALFORMED_PAYLOAD
    summary: str = "annotation is invalid"
    
    def __init__(self, key: str, detail: Optional[str] = None):
        self.key = key
        self.detail = detail
        message = f"{self.summary} ({key})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NEGAnnotationInvalidError(AnnotationError):
    """Raised when the NEG annotation is not a valid NEG document."""
    
    kind = ErrorKind.MALFORMED_PAYLOAD
    summary = "NEG annotation is invalid"


class ApplicationProtocolsInvalidError(AnnotationError):
    """Raised when the app-protocols annotation is not a JSON string map."""
    
    kind = ErrorKind.MALFORMED_PAYLOAD
    summary = "application protocols annotation is invalid json"


class UnknownAppProtocolError(AnnotationError):
    """Raised when a port maps to a protocol outside HTTP, HTTPS, HTTP2."""
    
    kind = ErrorKind.INVALID_ENUM_VALUE
    summary = "invalid port application protocol"
    
    def __init__(self, key: str, protocol: str):
        self.protocol = protocol
        super().__init__(key, repr(protocol))


class AppProtocolNotEnabledError(AnnotationError):
    """Raised when HTTP2 is requested while the HTTP2 feature gate is off."""
    
    kind = ErrorKind.INVALID_ENUM_VALUE
    summary = "http2 not enabled as port application protocol"
    
    def __init__(self, key: str, port: str):
        self.port = port
        super().__init__(key, f"port {port!r}")


class BackendConfigAnnotationMissingError(AnnotationError):
    """Raised when the backend-config annotation is absent."""
    
    kind = ErrorKind.NOT_FOUND
    summary = "BackendConfig annotation is missing"


class BackendConfigInvalidJSONError(AnnotationError):
    """Raised when the backend-config annotation is not valid JSON."""
    
    kind = ErrorKind.MALFORMED_PAYLOAD
    summary = "BackendConfig annotation is invalid json"


class BackendConfigNoneFoundError(AnnotationError):
    """Raised when the backend-config annotation names no config at all."""
    
    kind = ErrorKind.NO_USABLE_FIELD
    summary = "no BackendConfigs found in annotation"
