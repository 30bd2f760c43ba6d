"""
Request models package.
"""

from .enums import DataFormat, Verb
from .request import ApiVersionMixin, ServiceRequest, ServiceRequestData

__all__ = [
    "DataFormat",
    "Verb",
    "ApiVersionMixin",
    "ServiceRequest",
    "ServiceRequestData",
]
