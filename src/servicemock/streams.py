"""
Content stream resolution for mock response bodies.

Response definitions may reference their body instead of embedding it. The
`StreamFactory` maps such a reference onto a readable binary stream, supporting
remote URLs, package resources and files on disk:

::
    https://example.com/fixtures/user.json
    package:my_fixtures/users/user.json
    file:/srv/fixtures/user.json
    fixtures/user.json

`read_stream` consumes a stream to its end and always releases it afterwards.
"""

from __future__ import annotations

import contextlib
import importlib.resources
import io
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

import httpx
from loguru import logger

from servicemock.settings import settings

__all__ = [
    "FILE_PREFIX",
    "PACKAGE_PREFIX",
    "ContentStreamResolver",
    "StreamFactory",
    "read_stream",
    "stream_factory",
]

PACKAGE_PREFIX = "package:"
FILE_PREFIX = "file:"
URL_SCHEMES = ("http://", "https://")
DEFAULT_CHUNK_SIZE = 8192


@runtime_checkable
class ContentStreamResolver(Protocol):
    """Anything able to open a binary stream for a body reference."""

    def get_stream(self, reference: str) -> BinaryIO: ...


class StreamFactory:
    """
    Resolve body references into readable binary streams.

    References beginning with ``http://`` or ``https://`` are downloaded with
    httpx, references beginning with ``package:`` are loaded as package
    resources, and everything else is treated as a filesystem path, optionally
    prefixed with ``file:``. Relative paths are resolved against ``root``.

    Example:
    ::
        factory = StreamFactory(root=Path("fixtures"))
        with factory.get_stream("users/user.json") as stream:
            data = stream.read()
    """

    def __init__(
        self,
        root: Path | str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        """
        :param root: Directory that relative file references resolve against;
            defaults to the configured resource root or the working directory
        :param client: HTTP client used for URL references; a short-lived client
            is created per request when omitted
        :param timeout: Timeout in seconds for URL references; defaults to the
            configured request timeout
        """
        self._root = Path(root) if root is not None else None
        self.client = client
        self.timeout = timeout

    @property
    def root(self) -> Path:
        if self._root is not None:
            return self._root
        return settings.responses.resource_root or Path.cwd()

    def get_stream(self, reference: str) -> BinaryIO:
        """
        Open a binary stream for the given reference.

        :param reference: URL, package resource or file path of the content
        :return: An open binary stream the caller is responsible for closing
        :raises httpx.HTTPError: If a URL cannot be fetched
        :raises FileNotFoundError: If a file or package resource does not exist
        :raises ValueError: If a package reference is malformed
        """
        if reference.startswith(URL_SCHEMES):
            return self._open_url(reference)

        if reference.startswith(PACKAGE_PREFIX):
            return self._open_package_resource(reference[len(PACKAGE_PREFIX) :])

        if reference.startswith(FILE_PREFIX):
            reference = reference[len(FILE_PREFIX) :]

        return self._open_file(reference)

    def _open_url(self, url: str) -> BinaryIO:
        logger.debug(f"Fetching response content from {url}")
        timeout = self.timeout or settings.responses.request_timeout

        if self.client is not None:
            response = self.client.get(url, timeout=timeout)
        else:
            with httpx.Client(follow_redirects=True) as client:
                response = client.get(url, timeout=timeout)

        response.raise_for_status()

        return io.BytesIO(response.content)

    def _open_package_resource(self, location: str) -> BinaryIO:
        package, _, resource = location.partition("/")
        if not package or not resource:
            raise ValueError(
                f"Package reference must look like 'package:<package>/<path>', "
                f"got '{PACKAGE_PREFIX}{location}'"
            )
        logger.debug(f"Opening package resource {resource} from {package}")

        return importlib.resources.files(package).joinpath(resource).open("rb")

    def _open_file(self, location: str) -> BinaryIO:
        path = Path(location).expanduser()
        if not path.is_absolute():
            path = self.root / path
        logger.debug(f"Opening response content file {path}")

        return path.open("rb")


def read_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Read a binary stream to its end and close it.

    The stream is closed on every exit path. Errors raised while closing are
    discarded so they never replace the outcome of the read itself.

    :param stream: The stream to consume
    :param chunk_size: Number of bytes requested per read
    :return: All bytes read from the stream
    """
    buffer = bytearray()
    try:
        while chunk := stream.read(chunk_size):
            buffer.extend(chunk)
    finally:
        with contextlib.suppress(OSError):
            stream.close()

    return bytes(buffer)


stream_factory = StreamFactory()
