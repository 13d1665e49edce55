"""
kakao_api/utils/errors.py

WHAT THIS FILE IS FOR
---------------------
The single exception hierarchy raised by this library.

Every public operation either returns a usable value or raises one of
these. Nothing here terminates the process; callers decide whether to
retry, abort or fall back.

WHEN EACH ONE IS RAISED
-----------------------
Configuration time (raised by the builder setter itself):
- InvalidArgumentError   -> value outside a closed set / malformed value
- PayloadTooLargeError   -> local upload above the capability limit
- SourceIOError          -> local source cannot be opened for reading

Execution time (raised by collect()):
- RequestBuildError      -> request could not be assembled
- TransportError         -> DNS, refused connection, reset, ...
- TransportTimeoutError  -> deadline on the single call expired
- ApiResponseError       -> remote answered with HTTP >= 400
- DecodeError            -> body is not the documented JSON/XML shape

Persistence (raised by save_as()):
- UnsupportedFormatError -> extension has no serializer for that result
"""

from __future__ import annotations

from typing import Optional


class KakaoApiError(Exception):
    """Base class for every error raised by kakao_api."""


class InvalidArgumentError(KakaoApiError, ValueError):
    pass


class PayloadTooLargeError(KakaoApiError):
    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(f"{path} is {size} bytes; up to {limit} bytes are allowed")
        self.path = path
        self.size = size
        self.limit = limit


class SourceIOError(KakaoApiError, OSError):
    pass


class RequestBuildError(KakaoApiError):
    pass


class TransportError(KakaoApiError):
    pass


class TransportTimeoutError(TransportError):
    pass


class ApiResponseError(KakaoApiError):
    def __init__(self, status_code: int, body_snippet: Optional[str] = None) -> None:
        message = f"Kakao API error (status={status_code})"
        if body_snippet:
            message = f"{message}: {body_snippet}"
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class DecodeError(KakaoApiError):
    pass


class UnsupportedFormatError(KakaoApiError, ValueError):
    pass
