"""
kakao_api/capabilities/thumbnail_detect.py

Detects the representative area of an image for cropping a thumbnail.

POST {vision_api_base_url}/thumbnail/detect

- URL source  -> form-urlencoded: image_url, [width], [height]
- File source -> multipart/form-data: image=<bytes>, [width], [height]

width/height are the desired aspect ratio (e.g. 3:4); omitted ones are
left to the API default.

See https://developers.kakao.com/docs/latest/ko/vision/dev-guide#extract-thumbnail
"""

from __future__ import annotations

from typing import Optional

from kakao_api.capabilities.base import RequestBuilder
from kakao_api.schemas.input_schema import validate_ratio
from kakao_api.schemas.output_schema import ThumbnailDetectResult
from kakao_api.utils.http_client import form_fields
from kakao_api.utils.settings import Settings, base_url
from kakao_api.utils.source_classifier import FileSource, UrlSource, classify_source

UPLOAD_FIELD = "image"


class ThumbnailDetectBuilder(RequestBuilder):
    capability = "thumbnail_detect"

    def __init__(self, source: str, settings: Optional[Settings] = None) -> None:
        super().__init__(settings)
        self.width: Optional[int] = None
        self.height: Optional[int] = None
        self._replace_source(classify_source(source))

    def with_source(self, source: str) -> "ThumbnailDetectBuilder":
        self._replace_source(classify_source(source))
        return self

    def width_to(self, ratio: int) -> "ThumbnailDetectBuilder":
        self.width = validate_ratio(ratio, which="width ratio")
        return self

    def height_to(self, ratio: int) -> "ThumbnailDetectBuilder":
        self.height = validate_ratio(ratio, which="height ratio")
        return self

    def endpoint(self) -> str:
        return f"{base_url(self.settings.vision_api_base_url)}/thumbnail/detect"

    def collect(self) -> ThumbnailDetectResult:
        source = self._require_source()
        fields = form_fields(width=self.width, height=self.height)

        try:
            if isinstance(source, UrlSource):
                resp = self._send("POST", self.endpoint(), data={"image_url": source.url, **fields})
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

        return self._decode_json(resp, ThumbnailDetectResult)


def thumbnail_detect(source: str, *, settings: Optional[Settings] = None) -> ThumbnailDetectBuilder:
    """
    Detect a thumbnail area in `source`, a remote image URL or a local path.

    Raises:
        SourceIOError: `source` is a local path that cannot be opened.
    """
    return ThumbnailDetectBuilder(source, settings=settings)
