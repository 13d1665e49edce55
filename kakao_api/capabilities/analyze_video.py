"""
kakao_api/capabilities/analyze_video.py

WHAT THIS FILE IS FOR
---------------------
Submits a video to the pose API, which detects people in every frame
and extracts their key points asynchronously. The response only carries
a job id; results arrive at the callback URL or are fetched later.

REQUEST SHAPES
--------------
POST {pose_api_base_url}/job

- URL source  -> application/x-www-form-urlencoded
                 video_url=..&smoothing=true[&callback_url=..]
- File source -> multipart/form-data (boundary-inclusive Content-Type)
                 file=<bytes>, smoothing, [callback_url]

UPLOAD LIMIT
------------
with_file()/with_source() reject local files above
settings.max_video_upload_bytes (50 MiB by default) with
PayloadTooLargeError, closing the file before raising. No network I/O
happens in that case.

FILE LIFETIME
-------------
The file handle is closed by collect() on every exit path, and by the
builder whenever the source is replaced.

See https://developers.kakao.com/docs/latest/en/pose/dev-guide#job-submit
"""

from __future__ import annotations

from typing import Optional

import structlog

from kakao_api.capabilities.base import RequestBuilder
from kakao_api.schemas.input_schema import validate_callback_url, validate_flag
from kakao_api.schemas.output_schema import AnalyzeVideoResult
from kakao_api.utils.errors import InvalidArgumentError, PayloadTooLargeError
from kakao_api.utils.http_client import form_fields
from kakao_api.utils.settings import Settings, base_url
from kakao_api.utils.source_classifier import (
    FileSource,
    Source,
    UrlSource,
    classify_source,
    open_file_source,
    parse_url_source,
)

logger = structlog.get_logger(__name__)

UPLOAD_FIELD = "file"


class AnalyzeVideoBuilder(RequestBuilder):
    capability = "analyze_video"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__(settings)
        self.smoothing = True
        self.callback_url: Optional[str] = None

    def with_url(self, url: str) -> "AnalyzeVideoBuilder":
        """Analyze the video at a remote http(s) URL."""
        source = parse_url_source(url)
        if source is None:
            raise InvalidArgumentError(f"video URL must be an absolute http(s) URL; got {url!r}")
        self._replace_source(source)
        return self

    def with_file(self, path: str) -> "AnalyzeVideoBuilder":
        """
        Upload a local video file.

        Raises:
            SourceIOError: the file cannot be opened.
            PayloadTooLargeError: the file exceeds the upload limit.
        """
        self._replace_source(self._checked(open_file_source(path)))
        return self

    def with_source(self, source: str) -> "AnalyzeVideoBuilder":
        """Either with_url() or with_file(), decided by classify_source()."""
        self._replace_source(self._checked(classify_source(source)))
        return self

    def set_smoothing(self, enabled: bool) -> "AnalyzeVideoBuilder":
        """Smooth key point positions between detected frames (default True)."""
        self.smoothing = validate_flag(enabled, which="smoothing")
        return self

    def receive_to(self, callback_url: str) -> "AnalyzeVideoBuilder":
        """Ask the API to POST to `callback_url` once the analysis completes."""
        self.callback_url = validate_callback_url(callback_url)
        return self

    def _checked(self, source: Source) -> Source:
        if not isinstance(source, FileSource):
            return source
        limit = self.settings.max_video_upload_bytes
        size = source.size()
        if size > limit:
            source.close()
            logger.warning("video_upload_too_large", path=source.path, size=size, limit=limit)
            raise PayloadTooLargeError(source.path, size, limit)
        return source

    def endpoint(self) -> str:
        return f"{base_url(self.settings.pose_api_base_url)}/job"

    def collect(self) -> AnalyzeVideoResult:
        source = self._require_source()
        fields = form_fields(smoothing=self.smoothing, callback_url=self.callback_url)

        try:
            if isinstance(source, UrlSource):
                resp = self._send("POST", self.endpoint(), data={"video_url": source.url, **fields})
            else:
                resp = self._send(
                    "POST",
                    self.endpoint(),
                    data=fields,
                    files={UPLOAD_FIELD: source.as_upload()},
                )
        finally:
            if isinstance(source, FileSource):
                source.close()

        return self._decode_json(resp, AnalyzeVideoResult)


def analyze_video(*, settings: Optional[Settings] = None) -> AnalyzeVideoBuilder:
    """Start a pose analysis request; set a source with with_url() or with_file()."""
    return AnalyzeVideoBuilder(settings=settings)
