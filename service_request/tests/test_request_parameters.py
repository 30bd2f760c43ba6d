"""
Where: service_request/tests/test_request_parameters.py
What: Accessor contract for parameters and headers.
Why: Callers rely on "never set" being distinguishable from "set but empty".
"""

import pytest

from service_request.models.request import ServiceRequest


class TestParameters:
    def test_get_parameters_returns_empty_mapping_when_never_set(self):
        assert ServiceRequest().get_parameters() == {}

    @pytest.mark.parametrize("key", [None, "a", "missing"])
    def test_get_parameter_returns_default_when_never_set(self, key):
        assert ServiceRequest().get_parameter(key, "fallback") == "fallback"

    def test_get_parameter_without_key_returns_whole_mapping(self):
        request = ServiceRequest(parameters={"a": 1, "b": None})

        assert request.get_parameter() == {"a": 1, "b": None}

    def test_set_but_empty_mapping_is_returned_not_default(self):
        request = ServiceRequest(parameters={})

        assert request.get_parameter(None, "fallback") == {}
        assert request.get_parameter("a", "fallback") == "fallback"

    def test_set_parameters_replaces_mapping(self):
        request = ServiceRequest(parameters={"a": 1})

        request.set_parameters({"b": 2})

        assert request.get_parameters() == {"b": 2}

    def test_set_parameter_initializes_and_upserts(self):
        request = ServiceRequest()

        request.set_parameter("a", 1)
        request.set_parameter("a", 2)
        request.set_parameter("b", 3)

        assert request.get_parameters() == {"a": 2, "b": 3}

    def test_set_parameters_does_not_alias_caller_mapping(self):
        source = {"a": 1}
        request = ServiceRequest(parameters=source)

        source["b"] = 2

        assert request.get_parameters() == {"a": 1}

    def test_present_key_with_none_value_is_returned(self):
        request = ServiceRequest(parameters={"a": None})

        assert request.get_parameter("a", "fallback") is None

    def test_dot_path_reads_nested_values(self):
        request = ServiceRequest(parameters={"filter": {"fields": ["id", "name"]}})

        assert request.get_parameter("filter.fields.1") == "name"
        assert request.get_parameter("filter.missing", "x") == "x"

    @pytest.mark.parametrize(
        "value, expected",
        [("1", True), ("true", True), ("Yes", True), (1, True), (True, True),
         ("0", False), ("false", False), ("", False), (0, False), (None, False)],
    )
    def test_get_parameter_as_bool_coerces(self, value, expected):
        request = ServiceRequest(parameters={"flag": value})

        assert request.get_parameter_as_bool("flag") is expected

    def test_get_parameter_as_bool_missing_key_coerces_default(self):
        request = ServiceRequest(parameters={})

        assert request.get_parameter_as_bool("flag", "true") is True

    def test_get_parameter_as_bool_returns_default_unconverted_when_never_set(self):
        assert ServiceRequest().get_parameter_as_bool("flag", "yes") == "yes"


class TestHeaders:
    def test_get_headers_returns_empty_mapping_when_never_set(self):
        assert ServiceRequest().get_headers() == {}

    @pytest.mark.parametrize("key", [None, "Accept"])
    def test_get_header_returns_default_when_never_set(self, key):
        assert ServiceRequest().get_header(key, "fallback") == "fallback"

    def test_set_headers_and_set_header(self):
        request = ServiceRequest().set_headers({"Accept": "application/json"})

        request.set_header("X-Trace", "abc")

        assert request.get_headers() == {"Accept": "application/json", "X-Trace": "abc"}
        assert request.get_header("X-Trace") == "abc"
        assert request.get_header() == request.get_headers()

    def test_set_header_initializes_mapping(self):
        request = ServiceRequest()

        request.set_header("Accept", "text/plain")

        assert request.get_headers() == {"Accept": "text/plain"}

    def test_get_header_as_bool(self):
        request = ServiceRequest(headers={"X-Debug": "on", "X-Quiet": "no"})

        assert request.get_header_as_bool("X-Debug") is True
        assert request.get_header_as_bool("X-Quiet") is False
        assert ServiceRequest().get_header_as_bool("X-Debug", None) is None
