"""
servicemock provides configurable mock HTTP endpoint responses: status, delay,
headers, body and a percentile weight for choosing among several responses.
"""

from .errors import InvalidStateError, MockResponseError, ResponseParseError
from .logger import configure_logger, logger
from .response import (
    BodyLiteral,
    BodyReference,
    BodySource,
    MockResponse,
    ResponseDefinition,
)
from .settings import (
    LoggingSettings,
    ResponseSettings,
    Settings,
    print_config,
    reload_settings,
    settings,
)
from .streams import ContentStreamResolver, StreamFactory, read_stream, stream_factory

__all__ = [
    "BodyLiteral",
    "BodyReference",
    "BodySource",
    "ContentStreamResolver",
    "InvalidStateError",
    "LoggingSettings",
    "MockResponse",
    "MockResponseError",
    "ResponseDefinition",
    "ResponseParseError",
    "ResponseSettings",
    "Settings",
    "StreamFactory",
    "configure_logger",
    "logger",
    "print_config",
    "read_stream",
    "reload_settings",
    "settings",
    "stream_factory",
]
