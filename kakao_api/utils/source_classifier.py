"""
kakao_api/utils/source_classifier.py

WHAT THIS FILE IS FOR
---------------------
Decides whether a "source" string names a remote URL or a local file,
and returns exactly one of:

    UrlSource(url)            -> nothing opened
    FileSource(path, handle)  -> file opened "rb", positioned at offset 0

`Source` is the union of both, so a builder can never hold a URL and a
file at the same time.

OWNERSHIP
---------
A FileSource owns an open descriptor. Whoever holds it (a builder, then
its collect() call) must call close() exactly once on every exit path.
close() is idempotent so a second call is harmless.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union
from urllib.parse import urlparse

from kakao_api.utils.errors import SourceIOError

_URL_SCHEMES = {"http", "https"}


@dataclass(frozen=True)
class UrlSource:
    url: str


@dataclass(frozen=True)
class FileSource:
    path: str
    handle: BinaryIO

    @property
    def filename(self) -> str:
        return Path(self.path).name

    @property
    def closed(self) -> bool:
        return self.handle.closed

    def size(self) -> int:
        return os.fstat(self.handle.fileno()).st_size

    def as_upload(self) -> Tuple[str, BinaryIO]:
        """(filename, file object) tuple in the shape requests expects for `files=`."""
        return self.filename, self.handle

    def close(self) -> None:
        if not self.handle.closed:
            self.handle.close()


Source = Union[UrlSource, FileSource]


def parse_url_source(value: str) -> Optional[UrlSource]:
    """Return a UrlSource if `value` is a well-formed http(s) URL, else None."""
    candidate = (value or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme.lower() in _URL_SCHEMES and parsed.netloc:
        return UrlSource(url=candidate)
    return None


def open_file_source(path: str) -> FileSource:
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise SourceIOError(exc.errno, f"cannot open source for reading: {exc.strerror}", path) from exc
    return FileSource(path=str(path), handle=handle)


def classify_source(source: str) -> Source:
    """
    Classify `source` as a remote URL or a local path.

    Raises:
        SourceIOError: the local path cannot be opened for reading.
    """
    url_source = parse_url_source(source)
    if url_source is not None:
        return url_source
    return open_file_source(source)


def close_source(source: Optional[Source]) -> None:
    if isinstance(source, FileSource):
        source.close()
