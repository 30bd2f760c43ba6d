"""
Internal service request models.

A ServiceRequest carries one in-process call (method, parameters, headers,
raw content and its decoded payload) from a caller to a service handler
without going through the HTTP transport.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel, Field

from service_request.config import config
from service_request.core import request_context
from service_request.core.exceptions import (
    InvalidMethodError,
    MalformedContentError,
    PayloadRetrievalError,
)
from service_request.core.utils import array_get, decode_json_payload, to_bool
from service_request.models.enums import DataFormat, Verb

logger = logging.getLogger("service_request.request")

# Request parameter checked before the API key header.
API_KEY_PARAMETER = "api_key"


class ServiceRequestData(BaseModel):
    """
    Plain-mapping shape of a ServiceRequest.

    Produced by ServiceRequest.to_array() and validated by
    ServiceRequest.merge_from_array(), where model_fields_set tells which
    keys the caller actually supplied.
    """

    api_version: Optional[str] = Field(None, description="API version tag")
    method: Any = Field(None, description="Request method (validated by set_method)")
    parameters: Dict[Any, Any] = Field(default_factory=dict, description="Query/route parameters")
    headers: Dict[Any, Any] = Field(default_factory=dict, description="Request headers")
    payload: Any = Field(None, description="Decoded content; None if it could not be read")
    content: Any = Field(None, description="Raw content as supplied")
    content_type: Any = Field(None, description="DataFormat value or custom tag")


class ApiVersionMixin:
    """Adds an API version tag that falls back to the configured default."""

    _api_version: Optional[str] = None

    def get_api_version(self) -> Optional[str]:
        if self._api_version:
            return self._api_version
        return str(config.DEFAULT_API_VERSION) if config.DEFAULT_API_VERSION else None

    def set_api_version(self, version: Optional[str] = None):
        if not version:
            version = config.DEFAULT_API_VERSION
        self._api_version = str(version) if version else None
        return self


class ServiceRequest(ApiVersionMixin):
    """
    In-process request passed between services.

    Parameters and headers start out unset (None), which accessors report
    differently from an empty mapping: get_parameters() returns {} while
    get_parameter(key, default) returns default for every key.

    The payload is derived from content by set_content() according to the
    content type, but may also be replaced or edited directly, after which
    it is allowed to diverge from content.

    Instances are owned by a single call and are not meant to be shared
    between threads or tasks.
    """

    def __init__(
        self,
        method: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
        content: Any = None,
        content_type: Any = DataFormat.RAW_ARRAY,
        api_version: Optional[str] = None,
    ):
        self._method: Optional[Verb] = None
        self._parameters: Optional[Dict[str, Any]] = None
        self._headers: Optional[Dict[str, Any]] = None
        self._content: Any = None
        self._content_type: Any = None
        self._payload: Any = {}

        if api_version is not None:
            self.set_api_version(api_version)
        if method is not None:
            self.set_method(method)
        if parameters is not None:
            self.set_parameters(parameters)
        if headers is not None:
            self.set_headers(headers)
        if content is not None:
            self.set_content(content, content_type)

    @classmethod
    def from_array(cls, data: Mapping[str, Any]) -> "ServiceRequest":
        """Build a request from a to_array()-shaped mapping."""
        return cls().merge_from_array(data)

    def __repr__(self) -> str:
        method = self._method.value if self._method else None
        return f"ServiceRequest(method={method!r}, api_version={self._api_version!r})"

    # ------------------------------------------------------------------
    # Method
    # ------------------------------------------------------------------

    def set_method(self, verb: Any) -> "ServiceRequest":
        """
        Set the request method.

        Raises:
            InvalidMethodError: verb is not a recognized Verb value
        """
        if not Verb.contains(verb):
            raise InvalidMethodError(verb)

        self._method = Verb(verb)
        return self

    def get_method(self) -> Optional[Verb]:
        return self._method

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_parameters(self, parameters: Mapping[str, Any]) -> "ServiceRequest":
        self._parameters = dict(parameters)
        return self

    def set_parameter(self, key: str, value: Any) -> "ServiceRequest":
        if self._parameters is None:
            self._parameters = {}
        self._parameters[key] = value
        return self

    def get_parameters(self) -> Dict[str, Any]:
        return {} if self._parameters is None else self._parameters

    def get_parameter(self, key: Optional[str] = None, default: Any = None) -> Any:
        if self._parameters is None:
            return default
        return array_get(self._parameters, key, default)

    def get_parameter_as_bool(self, key: str, default: bool = False) -> Any:
        if self._parameters is None:
            return default
        return to_bool(array_get(self._parameters, key, default))

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def set_headers(self, headers: Mapping[str, Any]) -> "ServiceRequest":
        self._headers = dict(headers)
        return self

    def set_header(self, key: str, value: Any) -> "ServiceRequest":
        if self._headers is None:
            self._headers = {}
        self._headers[key] = value
        return self

    def get_headers(self) -> Dict[str, Any]:
        return {} if self._headers is None else self._headers

    def get_header(self, key: Optional[str] = None, default: Any = None) -> Any:
        if self._headers is None:
            return default
        return array_get(self._headers, key, default)

    def get_header_as_bool(self, key: str, default: bool = False) -> Any:
        if self._headers is None:
            return default
        return to_bool(array_get(self._headers, key, default))

    # ------------------------------------------------------------------
    # Content / payload
    # ------------------------------------------------------------------

    def set_content(self, data: Any, content_type: Any = DataFormat.RAW_ARRAY) -> "ServiceRequest":
        """
        Store raw content and derive the payload from it.

        RAW_ARRAY content is used as the payload directly. JSON content is
        decoded; if that fails a warning is logged and the payload becomes
        empty. Any other content type leaves the payload as it was.
        """
        content_type = DataFormat.coerce(content_type)
        self._content = data
        self._content_type = content_type

        if content_type is DataFormat.RAW_ARRAY:
            self._payload = _own(data) if data is not None else {}
        elif content_type is DataFormat.JSON:
            try:
                self._payload = decode_json_payload(data)
            except MalformedContentError as e:
                logger.warning(
                    "Failed to decode JSON content. Using empty payload.",
                    extra=self._log_extra(snippet=_snippet(data), error=str(e.cause)),
                )
                self._payload = {}

        return self

    def set_payload_data(self, data: Optional[Mapping[str, Any]]) -> "ServiceRequest":
        self._payload = _own(data) if data is not None else {}
        return self

    def set_payload_key_value(self, key: str, value: Any) -> "ServiceRequest":
        if not isinstance(self._payload, dict):
            self._payload = {}
        self._payload[key] = value
        return self

    def get_payload_data(self, key: Optional[str] = None, default: Any = None) -> Any:
        return array_get(self._payload, key, default)

    def get_content(self) -> Any:
        return self._content

    def get_content_type(self) -> Any:
        return self._content_type

    # ------------------------------------------------------------------
    # Derived accessors
    # ------------------------------------------------------------------

    def input(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Look up key in parameters, then in the payload, then fall back to default."""
        return self.get_parameter(key, self.get_payload_data(key, default))

    def get_api_key(self) -> Optional[str]:
        api_key = self.get_parameter(API_KEY_PARAMETER)
        if not api_key:
            api_key = self.get_header(config.API_KEY_HEADER)
        return api_key or None

    def get_file(self, key: Optional[str] = None, default: Any = None) -> None:
        # Internal calls never carry multipart uploads.
        return None

    def get_driver(self) -> None:
        # No transport connection backs an internal request.
        return None

    def get_request_id(self) -> Optional[str]:
        """Request id header, else the id bound by an enclosing request_scope()."""
        return self.get_header(config.REQUEST_ID_HEADER) or request_context.get_request_id()

    @contextmanager
    def request_scope(self) -> Iterator[str]:
        """
        Bind this request's id to the logging context while it is handled.

        A request without an id inherits the enclosing scope's id or gets a
        new one; either way it is written to the request id header so that
        sub-requests built from this one's headers keep the correlation.
        """
        request_id = self.get_request_id()
        if not request_id:
            request_id = request_context.new_request_id()
        if self.get_header(config.REQUEST_ID_HEADER) != request_id:
            self.set_header(config.REQUEST_ID_HEADER, request_id)

        with request_context.bind_request_id(request_id):
            yield request_id

    def _log_extra(self, **fields: Any) -> Dict[str, Any]:
        request_id = self.get_request_id()
        if request_id:
            fields["request_id"] = request_id
        return fields

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_array(self) -> Dict[str, Any]:
        """
        Snapshot the request as a plain dict.

        Keys: api_version, method, parameters, headers, payload, content,
        content_type. If the payload cannot be read it is logged and
        reported as None so that serialization itself never fails.
        """
        snapshot = ServiceRequestData(
            api_version=self.get_api_version(),
            method=_plain(self.get_method()),
            parameters=self.get_parameters(),
            headers=self.get_headers(),
            payload=self._read_payload(),
            content=self.get_content(),
            content_type=_plain(self.get_content_type()),
        )
        return snapshot.model_dump()

    def merge_from_array(self, data: Mapping[str, Any]) -> "ServiceRequest":
        """
        Apply the keys present in data, leaving the others untouched.

        Keys are applied in this order: method, parameters, headers,
        payload, then content together with content_type. An invalid
        method raises InvalidMethodError; keys applied before a failure
        are not rolled back.

        A present "method" key must hold a verb, so a snapshot of a request
        whose method was never set ({"method": None, ...}) cannot be merged
        back as is; drop the key first.

        Raises:
            InvalidMethodError: data["method"] is not a recognized verb
            pydantic.ValidationError: a value has the wrong shape
        """
        snapshot = ServiceRequestData.model_validate(dict(data))
        present = snapshot.model_fields_set

        if "method" in present:
            self.set_method(snapshot.method)
        if "parameters" in present:
            self.set_parameters(snapshot.parameters)
        if "headers" in present:
            self.set_headers(snapshot.headers)
        if "payload" in present:
            self.set_payload_data(snapshot.payload)
        if "content" in present:
            self.set_content(snapshot.content, snapshot.content_type)

        return self

    def _read_payload(self) -> Any:
        try:
            return self.get_payload_data()
        except Exception as e:
            logger.warning(
                str(PayloadRetrievalError(e)),
                exc_info=True,
                extra=self._log_extra(method=_plain(self._method)),
            )
            return None


def _own(data: Any) -> Any:
    """Shallow-copy mappings so the request does not alias caller state."""
    if isinstance(data, Mapping):
        return dict(data)
    return data


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, (Verb, DataFormat)) else value


def _snippet(data: Any) -> str:
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return str(data)[: config.PAYLOAD_LOG_SNIPPET_LENGTH]
