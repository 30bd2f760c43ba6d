"""
In-process service requests: an HTTP-like call (method, headers,
parameters, content) that one service hands to another without the
network transport.
"""

from .core.exceptions import InvalidMethodError, ServiceRequestError
from .core.logging_config import setup_logging
from .models import DataFormat, ServiceRequest, Verb

__all__ = [
    "DataFormat",
    "InvalidMethodError",
    "ServiceRequest",
    "ServiceRequestError",
    "Verb",
    "setup_logging",
]
