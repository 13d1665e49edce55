# tests/test_result_persistence.py
from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from pydantic import ValidationError

from kakao_api.schemas.output_schema import (
    AnalyzeVideoResult,
    CoordToDistrictResult,
    ThumbnailDetectResult,
)
from kakao_api.utils.errors import UnsupportedFormatError
from kakao_api.utils.result_persistence import xml_to_dict


@pytest.fixture()
def coord_result() -> CoordToDistrictResult:
    return CoordToDistrictResult.model_validate(
        {
            "meta": {"total_count": 2},
            "documents": [
                {
                    "region_type": "B",
                    "address_name": "서울특별시 중구 태평로1가",
                    "region_1depth_name": "서울특별시",
                    "region_2depth_name": "중구",
                    "region_3depth_name": "태평로1가",
                    "region_4depth_name": "",
                    "code": "1114010300",
                    "x": 126.97812,
                    "y": 37.566331,
                },
                {
                    "region_type": "H",
                    "address_name": "서울특별시 중구 명동",
                    "region_1depth_name": "서울특별시",
                    "region_2depth_name": "중구",
                    "region_3depth_name": "명동",
                    "region_4depth_name": "",
                    "code": "1114055000",
                    "x": 126.98561,
                    "y": 37.563752,
                },
            ],
        }
    )


@pytest.fixture()
def thumb_result() -> ThumbnailDetectResult:
    return ThumbnailDetectResult.model_validate(
        {
            "rid": "rid-1",
            "result": {"width": 640, "height": 480, "thumbnail": {"x": 80, "y": 0, "width": 480, "height": 480}},
        }
    )


def test_json_round_trip(tmp_path: Path, coord_result: CoordToDistrictResult) -> None:
    out = tmp_path / "out.json"

    coord_result.save_as(str(out))

    text = out.read_text(encoding="utf-8")
    assert text.startswith('{\n  "meta": {\n    "total_count": 2')
    assert CoordToDistrictResult.model_validate(json.loads(text)) == coord_result


def test_xml_round_trip(tmp_path: Path, coord_result: CoordToDistrictResult) -> None:
    out = tmp_path / "out.xml"

    coord_result.save_as(out)

    root = ET.parse(out).getroot()
    assert root.tag == "result"
    assert [el.tag for el in root] == ["meta", "documents", "documents"]
    assert "\n  <meta>\n    <total_count>2</total_count>" in out.read_text(encoding="utf-8")
    assert CoordToDistrictResult.model_validate(xml_to_dict(root)) == coord_result


def test_unsupported_extension_writes_nothing(tmp_path: Path, coord_result: CoordToDistrictResult) -> None:
    out = tmp_path / "out.txt"

    with pytest.raises(UnsupportedFormatError):
        coord_result.save_as(out)

    assert not out.exists()


def test_xml_is_unsupported_for_json_only_results(
    tmp_path: Path, thumb_result: ThumbnailDetectResult
) -> None:
    out = tmp_path / "thumb.xml"

    with pytest.raises(UnsupportedFormatError):
        thumb_result.save_as(out)

    assert not out.exists()


def test_extension_match_is_case_insensitive(tmp_path: Path, thumb_result: ThumbnailDetectResult) -> None:
    out = tmp_path / "THUMB.JSON"

    thumb_result.save_as(out)

    assert ThumbnailDetectResult.model_validate_json(out.read_text(encoding="utf-8")) == thumb_result


def test_str_renders_two_space_json(thumb_result: ThumbnailDetectResult) -> None:
    rendered = str(thumb_result)

    assert rendered.startswith('{\n  "rid": "rid-1"')
    assert json.loads(rendered)["result"]["thumbnail"]["x"] == 80
    assert json.loads(str(AnalyzeVideoResult(job_id="j"))) == {"job_id": "j"}


def test_results_are_frozen(thumb_result: ThumbnailDetectResult) -> None:
    with pytest.raises(ValidationError):
        thumb_result.rid = "changed"


def test_xml_to_dict_collects_repeated_tags() -> None:
    root = ET.fromstring("<r><a>1</a><a>2</a><b><c/></b></r>")

    assert xml_to_dict(root) == {"a": ["1", "2"], "b": {"c": ""}}
