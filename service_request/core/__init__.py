"""
Core logic package.

Provides shared helpers such as lookups, errors and logging setup.
"""

from .exceptions import (
    InvalidMethodError,
    MalformedContentError,
    PayloadRetrievalError,
    ServiceRequestError,
)
from .utils import array_get, decode_json_payload, to_bool

__all__ = [
    "InvalidMethodError",
    "MalformedContentError",
    "PayloadRetrievalError",
    "ServiceRequestError",
    "array_get",
    "decode_json_payload",
    "to_bool",
]
