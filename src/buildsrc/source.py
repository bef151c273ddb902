from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Protocol
from urllib.parse import urlparse

import httpx

from .util.path import canonicalize, expand_user

URL_SCHEMES = ("http", "https")


class InvalidSourceError(ValueError):
    """Raised when a source is constructed from a missing or unusable value."""


class SourceUnavailableError(OSError):
    """Raised when a remote source cannot be fetched."""


class Source(Protocol):
    def open_read(self) -> BinaryIO: ...

    def location(self) -> str: ...


@dataclass(frozen=True, eq=False, slots=True)
class PathSource:
    """A source backed by a file on the local filesystem.

    The path is made absolute when the source is created, so later changes
    of the working directory do not move it. Nothing is checked on disk until
    :meth:`open_read` is called.
    """

    path: Path
    _hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.path is None:
            raise InvalidSourceError("path cannot be None")
        try:
            canonical = canonicalize(self.path)
        except ValueError as exc:
            raise InvalidSourceError(str(exc)) from exc
        object.__setattr__(self, "path", canonical)
        object.__setattr__(self, "_hash", hash(canonical))

    def open_read(self) -> BinaryIO:
        return open(self.path, "rb")

    def location(self) -> str:
        return str(self.path)

    def __str__(self) -> str:
        return self.location()

    def __repr__(self) -> str:
        return f"PathSource({self.location()!r})"

    def __hash__(self) -> int:
        return self._hash

    def __reduce__(self):
        # the cached hash is only valid in the process that computed it
        return (type(self), (str(self.path),))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not PathSource or type(self) is not PathSource:
            return NotImplemented
        return self.path == other.path


@dataclass(frozen=True, eq=False, slots=True)
class StringSource:
    content: str
    label: str = "(memory)"

    def __post_init__(self) -> None:
        if self.content is None:
            raise InvalidSourceError("content cannot be None")
        if not isinstance(self.content, str):
            raise TypeError(
                f"content must be str, got {type(self.content).__name__}"
            )
        if not isinstance(self.label, str):
            raise InvalidSourceError(
                f"label must be str, got {type(self.label).__name__}"
            )

    def open_read(self) -> BinaryIO:
        return io.BytesIO(self.content.encode("utf-8"))

    def location(self) -> str:
        return self.label

    def __str__(self) -> str:
        return self.location()

    def __hash__(self) -> int:
        return hash((self.content, self.label))

    def __eq__(self, other: object) -> bool:
        if type(other) is not StringSource or type(self) is not StringSource:
            return NotImplemented
        return (self.content, self.label) == (other.content, other.label)


@dataclass(frozen=True, eq=False, slots=True)
class UrlSource:
    """A source fetched over HTTP(S), one GET per :meth:`open_read` call."""

    url: str
    timeout: float = 30.0
    client: httpx.Client | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.url:
            raise InvalidSourceError("url cannot be empty")
        parsed = urlparse(self.url)
        if parsed.scheme not in URL_SCHEMES:
            raise InvalidSourceError(
                f"Unsupported URL scheme (expected http or https): {self.url}"
            )
        if not parsed.netloc:
            raise InvalidSourceError(f"Invalid URL (no host): {self.url}")

    def open_read(self) -> BinaryIO:
        try:
            if self.client is not None:
                response = self.client.get(
                    self.url, timeout=self.timeout, follow_redirects=True
                )
            else:
                response = httpx.get(
                    self.url, timeout=self.timeout, follow_redirects=True
                )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(f"{self.url}: {exc}") from exc
        return io.BytesIO(response.content)

    def location(self) -> str:
        return self.url

    def __str__(self) -> str:
        return self.location()

    def __hash__(self) -> int:
        return hash(self.url)

    def __eq__(self, other: object) -> bool:
        if type(other) is not UrlSource or type(self) is not UrlSource:
            return NotImplemented
        return self.url == other.url


def from_token(token: str | os.PathLike[str]) -> Source:
    if isinstance(token, str) and urlparse(token).scheme.lower() in URL_SCHEMES:
        return UrlSource(token)
    if isinstance(token, str):
        if not token:
            raise InvalidSourceError("Source token must not be empty")
        return PathSource(expand_user(token))
    return PathSource(token)
