from __future__ import annotations

import logging

from .source import Source

logger = logging.getLogger("buildsrc")


class SourceReadError(OSError):
    """A source could not be read; the message leads with its location."""

    def __init__(self, location: str, cause: BaseException) -> None:
        super().__init__(f"{location}: {cause}")
        self.location = location
        self.cause = cause


def read_bytes(source: Source) -> bytes:
    location = source.location()
    try:
        with source.open_read() as stream:
            data = stream.read()
    except OSError as exc:
        raise SourceReadError(location, exc) from exc
    logger.debug("read location=%s bytes=%d", location, len(data))
    return data


def read_text(source: Source, encoding: str = "utf-8") -> str:
    data = read_bytes(source)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise SourceReadError(source.location(), exc) from exc
