"""
Custom exception classes.

Represent errors raised while populating or reading a ServiceRequest.
"""

from typing import Any


class ServiceRequestError(Exception):
    """Base exception class for service requests."""

    pass


class InvalidMethodError(ServiceRequestError, ValueError):
    """Raised when a method is not one of the recognized verbs."""

    def __init__(self, method: Any):
        self.method = method
        super().__init__(f"Invalid method '{method}'")


class MalformedContentError(ServiceRequestError):
    """Raised when content cannot be decoded into a payload."""

    def __init__(self, content_type: Any, cause: Exception):
        self.content_type = content_type
        self.cause = cause
        super().__init__(f"Failed to decode {content_type} content: {cause}")


class PayloadRetrievalError(ServiceRequestError):
    """Raised when the payload cannot be read back for serialization."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to read payload: {cause}")
