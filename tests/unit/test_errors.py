from __future__ import annotations

import pytest

from servicemock.errors import InvalidStateError, MockResponseError, ResponseParseError


@pytest.mark.smoke
def test_error_hierarchy():
    assert issubclass(InvalidStateError, MockResponseError)
    assert issubclass(InvalidStateError, ValueError)
    assert issubclass(ResponseParseError, MockResponseError)
    assert issubclass(ResponseParseError, RuntimeError)


@pytest.mark.smoke
def test_parse_error_default_message():
    assert str(ResponseParseError()) == "Failed to parse endpoint response"
    assert str(ResponseParseError("custom")) == "custom"


@pytest.mark.sanity
def test_parse_error_keeps_cause():
    cause = OSError("disk")

    with pytest.raises(ResponseParseError) as exc_info:
        try:
            raise cause
        except OSError as err:
            raise ResponseParseError() from err

    assert exc_info.value.__cause__ is cause
