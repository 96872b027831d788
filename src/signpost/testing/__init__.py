"""Test utilities for signpost applications.

Provides an in-process ASGI test client and response assertions::

    from signpost.testing import TestClient, assert_json_response
"""

from signpost.testing.assertions import (
    assert_json_response,
    assert_not_found,
    assert_text_response,
)
from signpost.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_json_response",
    "assert_not_found",
    "assert_text_response",
]
