"""Kakao Developers API client: pose analysis, coordinate lookup, thumbnail detection."""

from kakao_api.capabilities.analyze_video import AnalyzeVideoBuilder, analyze_video
from kakao_api.capabilities.coord_to_district import CoordToDistrictBuilder, coord_to_district
from kakao_api.capabilities.thumbnail_detect import ThumbnailDetectBuilder, thumbnail_detect
from kakao_api.schemas.output_schema import (
    AnalyzeVideoResult,
    CoordToDistrictResult,
    Region,
    Thumbnail,
    ThumbnailDetectResult,
    ThumbnailResult,
)
from kakao_api.utils.errors import (
    ApiResponseError,
    DecodeError,
    InvalidArgumentError,
    KakaoApiError,
    PayloadTooLargeError,
    RequestBuildError,
    SourceIOError,
    TransportError,
    TransportTimeoutError,
    UnsupportedFormatError,
)
from kakao_api.utils.settings import Settings, get_settings

__all__ = [
    "AnalyzeVideoBuilder",
    "AnalyzeVideoResult",
    "ApiResponseError",
    "CoordToDistrictBuilder",
    "CoordToDistrictResult",
    "DecodeError",
    "InvalidArgumentError",
    "KakaoApiError",
    "PayloadTooLargeError",
    "Region",
    "RequestBuildError",
    "Settings",
    "SourceIOError",
    "Thumbnail",
    "ThumbnailDetectBuilder",
    "ThumbnailDetectResult",
    "ThumbnailResult",
    "TransportError",
    "TransportTimeoutError",
    "UnsupportedFormatError",
    "analyze_video",
    "coord_to_district",
    "get_settings",
    "thumbnail_detect",
]
