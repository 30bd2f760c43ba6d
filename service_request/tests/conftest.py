import pytest

from service_request.core import request_context


@pytest.fixture(autouse=True)
def _clear_request_id():
    """Each test starts without a Request ID in context."""
    request_context.clear_request_id()
    yield
    request_context.clear_request_id()
