"""
kakao_api/capabilities/coord_to_district.py

Coordinate -> administrative (H) / legal (B) region lookup.

    result = (
        coord_to_district(127.1, 37.4)
        .authorize_with(key)
        .input("WGS84")
        .output("WTM")
        .format_as("xml")
        .collect()
    )

GET {local_api_base_url}/geo/coord2regioncode.{json|xml}
    ?x=..&y=..&input_coord=..&output_coord=..

The path suffix selects the response body format; collect() decodes
with the matching decoder.

See https://developers.kakao.com/docs/latest/ko/local/dev-guide#coord-to-district
"""

from __future__ import annotations

from typing import Optional

from kakao_api.capabilities.base import RequestBuilder
from kakao_api.schemas.input_schema import (
    format_coordinate,
    validate_coord_system,
    validate_response_format,
)
from kakao_api.schemas.output_schema import CoordToDistrictResult
from kakao_api.utils.settings import Settings, base_url


class CoordToDistrictBuilder(RequestBuilder):
    capability = "coord_to_district"

    def __init__(self, x: float, y: float, settings: Optional[Settings] = None) -> None:
        x_text = format_coordinate(x, which="x")
        y_text = format_coordinate(y, which="y")
        super().__init__(settings)
        self.x = x_text
        self.y = y_text
        self.response_format = "json"
        self.input_coord = "WGS84"
        self.output_coord = "WGS84"

    def format_as(self, response_format: str) -> "CoordToDistrictBuilder":
        """Request the response body as "json" or "xml"."""
        self.response_format = validate_response_format(response_format)
        return self

    def input(self, coord: str) -> "CoordToDistrictBuilder":
        """
        Set the coordinate system of x and y.

        One of: WGS84, WCONGNAMUL, CONGNAMUL, WTM, TM
        """
        self.input_coord = validate_coord_system(coord, which="input")
        return self

    def output(self, coord: str) -> "CoordToDistrictBuilder":
        """
        Set the coordinate system of the returned region centers.

        One of: WGS84, WCONGNAMUL, CONGNAMUL, WTM, TM
        """
        self.output_coord = validate_coord_system(coord, which="output")
        return self

    def endpoint(self) -> str:
        return f"{base_url(self.settings.local_api_base_url)}/geo/coord2regioncode.{self.response_format}"

    def collect(self) -> CoordToDistrictResult:
        resp = self._send(
            "GET",
            self.endpoint(),
            params={
                "x": self.x,
                "y": self.y,
                "input_coord": self.input_coord,
                "output_coord": self.output_coord,
            },
        )
        if self.response_format == "xml":
            return self._decode_xml(resp, CoordToDistrictResult)
        return self._decode_json(resp, CoordToDistrictResult)


def coord_to_district(x: float, y: float, *, settings: Optional[Settings] = None) -> CoordToDistrictBuilder:
    """
    Look up the regions containing (x, y).

    Raises:
        InvalidArgumentError: x or y is not a finite number.
    """
    return CoordToDistrictBuilder(x, y, settings=settings)
