"""
Where: service_request/tests/test_package_exports.py
What: Guard tests for package-level exports.
Why: Prevent regressions when editing package __init__.py files.
"""


def test_top_level_package_re_exports() -> None:
    from service_request import DataFormat, InvalidMethodError, ServiceRequest, Verb, setup_logging

    assert ServiceRequest.__name__ == "ServiceRequest"
    assert InvalidMethodError.__name__ == "InvalidMethodError"
    assert Verb.GET == "GET"
    assert DataFormat.JSON == "json"
    assert callable(setup_logging)


def test_core_package_re_exports() -> None:
    from service_request.core import array_get, decode_json_payload, to_bool

    assert callable(array_get)
    assert callable(decode_json_payload)
    assert callable(to_bool)
