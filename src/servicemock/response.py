"""
Mock endpoint response configuration.

A `MockResponse` describes one response a mock service endpoint can return:
its HTTP status, the delay before answering, headers, body text, and the
percentile weight used when several responses are configured for the same
endpoint. Responses are built either programmatically through chained
``with_*`` setters or from a definition mapping, typically parsed from JSON or
YAML:

::
    {
        "status": 201,
        "delay": 50,
        "percentile": 25,
        "headers": {"Content-Type": "application/json"},
        "body": {"id": 1}
    }

A string body is a reference to external content resolved through a
`ContentStreamResolver`; any other body value is rendered as indented JSON.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from servicemock import streams
from servicemock.errors import InvalidStateError, ResponseParseError
from servicemock.settings import settings
from servicemock.streams import ContentStreamResolver, read_stream

__all__ = [
    "PERCENTILE_RANGE",
    "STATUS_RANGE",
    "BodyLiteral",
    "BodyReference",
    "BodySource",
    "MockResponse",
    "ResponseDefinition",
]

STATUS_RANGE = (100, 599)
PERCENTILE_RANGE = (0, 100)


class BodyReference(BaseModel):
    """Body loaded from external content identified by a reference string."""

    reference: str = Field(description="URL, package resource or file path")

    def render(self, resolver: ContentStreamResolver) -> str:
        logger.debug(f"Resolving response body reference {self.reference}")
        content = read_stream(resolver.get_stream(self.reference))

        return content.decode(settings.responses.encoding, errors="replace")


class BodyLiteral(BaseModel):
    """Body given inline as a structured value and rendered as JSON text."""

    value: Any = Field(default=None, description="Any JSON compatible value")

    def render(self, resolver: ContentStreamResolver) -> str:  # noqa: ARG002
        return json.dumps(
            self.value, indent=settings.responses.json_indent, ensure_ascii=False
        )


BodySource = BodyReference | BodyLiteral


class ResponseDefinition(BaseModel):
    """
    Decoded form of a response definition mapping.

    Every key is optional. ``body`` is decoded into a `BodySource` so the kind of
    body is fixed once, at validation time.
    """

    model_config = ConfigDict(extra="ignore")

    status: int | None = None
    delay: int | None = None
    percentile: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    body: BodySource | None = None

    @field_validator("body", mode="before")
    @classmethod
    def _body_validator(cls, value: Any) -> BodySource:
        if isinstance(value, BodyReference | BodyLiteral):
            return value

        if isinstance(value, str):
            return BodyReference(reference=value)

        return BodyLiteral(value=value)

    def to_response(
        self,
        default_status: int,
        default_delay: int,
        resolver: ContentStreamResolver | None = None,
    ) -> MockResponse:
        """
        Build the mock response this definition describes.

        Bounds of ``status`` and ``percentile`` are not checked here, unlike the
        fluent setters of `MockResponse`.

        :param default_status: Status used when the definition has none
        :param default_delay: Delay in milliseconds used when the definition has none
        :param resolver: Resolver for referenced bodies; defaults to the shared
            `stream_factory`
        :return: The populated mock response
        :raises ResponseParseError: If the body cannot be resolved or rendered
        """
        body = None
        if self.body is not None:
            try:
                body = self.body.render(resolver or streams.stream_factory)
            except Exception as err:
                logger.error(f"Failed to render response body {self.body!r}: {err}")
                raise ResponseParseError() from err

        return MockResponse(
            status=default_status if self.status is None else self.status,
            delay=default_delay if self.delay is None else self.delay,
            percentile=0 if self.percentile is None else self.percentile,
            headers=dict(self.headers),
            body=body,
        )


class MockResponse(BaseModel):
    """
    Configuration of a single mock endpoint response.

    Fields may be read directly. The ``with_*`` setters validate their argument,
    update the response in place and return it so calls can be chained.
    ``headers`` is the response's own dictionary, so changes made through it are
    kept.

    Responses order by percentile only, which lets callers sort the candidate
    responses of an endpoint by weight.

    Example:
    ::
        response = (
            MockResponse()
            .with_status(404)
            .with_delay(250)
            .with_header("Content-Type", "text/plain")
            .with_body("not found")
        )
        str(response)  # "404"
    """

    status: int = Field(default=0, description="HTTP status code to answer with")
    delay: int = Field(default=0, description="Milliseconds to wait before answering")
    percentile: int = Field(
        default=0, description="Weight used to choose among endpoint responses"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="HTTP headers sent with the response"
    )
    body: str | None = Field(default=None, description="Response body text")

    @classmethod
    def from_attributes(
        cls,
        default_status: int,
        default_delay: int,
        attributes: Mapping[str, Any],
        stream_factory: ContentStreamResolver | None = None,
    ) -> MockResponse:
        """
        Create a mock response from a definition mapping.

        :param default_status: Status used when ``attributes`` has no "status"
        :param default_delay: Delay used when ``attributes`` has no "delay"
        :param attributes: The definition, e.g. a parsed JSON object
        :param stream_factory: Resolver for string bodies
        :return: The new mock response
        :raises ResponseParseError: If the definition holds values of the wrong
            type or its body cannot be resolved
        """
        try:
            definition = ResponseDefinition.model_validate(dict(attributes))
        except ValidationError as err:
            logger.error(f"Invalid endpoint response definition: {err}")
            raise ResponseParseError() from err

        return definition.to_response(default_status, default_delay, stream_factory)

    @classmethod
    def from_file(
        cls,
        filename: Path | str,
        default_status: int | None = None,
        default_delay: int | None = None,
        stream_factory: ContentStreamResolver | None = None,
    ) -> MockResponse:
        """
        Create a mock response from a json or yaml definition file.
        Missing defaults come from the response settings.
        """
        filename = Path(filename)
        try:
            with filename.open() as f:
                if filename.suffix == ".json":
                    data = json.load(f)
                else:  # Assume everything else is yaml
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as err:
            logger.error(f"Failed to parse {filename} as type {cls.__name__}")
            raise ResponseParseError(f"Error when parsing file: {filename}") from err

        if not isinstance(data, Mapping):
            logger.error(f"Failed to parse {filename} as type {cls.__name__}")
            raise ResponseParseError(
                f"Expected a response object in {filename}, got {type(data).__name__}"
            )

        if default_status is None:
            default_status = settings.responses.default_status
        if default_delay is None:
            default_delay = settings.responses.default_delay

        return cls.from_attributes(
            default_status, default_delay, data, stream_factory=stream_factory
        )

    def with_status(self, status: int) -> MockResponse:
        """
        Set the HTTP status returned for the response.

        :param status: The HTTP status in the range 100..599
        :return: This response
        :raises InvalidStateError: If the status is out of range
        """
        if not STATUS_RANGE[0] <= status <= STATUS_RANGE[1]:
            raise InvalidStateError(
                f"Status must be in the range {STATUS_RANGE[0]}..{STATUS_RANGE[1]}"
            )
        self.status = status

        return self

    def with_delay(self, delay: int) -> MockResponse:
        """
        Set how many milliseconds the service waits before responding.

        :param delay: The wait time in milliseconds
        :return: This response
        """
        self.delay = delay

        return self

    def with_percentile(self, percentile: int) -> MockResponse:
        """
        Set the percentile used when selecting this response out of several.
        A response is picked at random roughly that share of the time.

        :param percentile: The percentile in the range 0..100
        :return: This response
        :raises InvalidStateError: If the percentile is out of range
        """
        if not PERCENTILE_RANGE[0] <= percentile <= PERCENTILE_RANGE[1]:
            raise InvalidStateError(
                f"A percentile must be in the range "
                f"{PERCENTILE_RANGE[0]}..{PERCENTILE_RANGE[1]}"
            )
        self.percentile = percentile

        return self

    def with_header(self, key: str, value: str) -> MockResponse:
        self.headers[key] = value

        return self

    def with_body(self, body: str) -> MockResponse:
        self.body = body

        return self

    def compare_to(self, other: MockResponse) -> int:
        """
        Compare two responses by percentile.

        :param other: The response to compare against
        :return: 0 when the percentiles match, 1 when this percentile is
            greater, -1 otherwise
        """
        if self.percentile == other.percentile:
            return 0

        return 1 if self.percentile > other.percentile else -1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MockResponse):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, MockResponse):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, MockResponse):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, MockResponse):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return str(self.status)
