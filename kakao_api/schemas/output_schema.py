# -------------------------------------------------------------------
# kakao_api/schemas/output_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Typed result payloads, one family per capability:
#
#   - AnalyzeVideoResult      (pose: job submission)
#   - CoordToDistrictResult   (local: coordinate -> region code)
#   - ThumbnailDetectResult   (vision: thumbnail detection)
#
# NAMING CONVENTION (IMPORTANT)
# -----------------------------
# Field names are the documented Kakao API keys, verbatim
# (job_id, region_1depth_name, total_count, ...).
# They are used as-is for JSON and XML persistence.
#
# DO NOT rename fields or add aliases here.
# Persisted files must mirror the API schema field-for-field.
#
# IMMUTABILITY
# ------------
# Results are created once, at decode time, and are frozen afterwards.
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT:
# - Perform HTTP calls
# - Choose the response format
# - Know about builders
# -------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kakao_api.utils.result_persistence import PathLike, save_as, to_json


class ResultModel(BaseModel):
    """
    Base for every decoded result.

    Subclasses that can be persisted as XML declare `xml_root`, and the
    list fields an XML body omits entirely when they are empty.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    xml_root: ClassVar[Optional[str]] = None
    xml_list_fields: ClassVar[Tuple[str, ...]] = ()

    def __str__(self) -> str:
        return to_json(self)

    def save_as(self, filename: PathLike) -> Path:
        return save_as(self, filename, xml_root=self.xml_root)


# -------------------------------------------------------------------
# pose
# -------------------------------------------------------------------
class AnalyzeVideoResult(ResultModel):
    """Job accepted by the pose API; poll or wait for the callback with job_id."""

    job_id: str


# -------------------------------------------------------------------
# local
# -------------------------------------------------------------------
class Region(ResultModel):
    region_type: str = ""
    address_name: str = ""
    region_1depth_name: str = ""
    region_2depth_name: str = ""
    region_3depth_name: str = ""
    region_4depth_name: str = ""
    code: str = ""
    x: float = 0.0
    y: float = 0.0


class CoordToDistrictMeta(ResultModel):
    total_count: int = 0


class CoordToDistrictResult(ResultModel):
    """Administrative (H) and legal (B) regions containing a coordinate."""

    xml_root: ClassVar[Optional[str]] = "result"
    xml_list_fields: ClassVar[Tuple[str, ...]] = ("documents",)

    meta: CoordToDistrictMeta
    documents: List[Region]

    @field_validator("documents", mode="before")
    @classmethod
    def _documents_as_list(cls, value: Any) -> Any:
        # XML bodies carry a single <documents> element as a dict
        if value is None or value == "":
            return []
        if isinstance(value, dict):
            return [value]
        return value


# -------------------------------------------------------------------
# vision
# -------------------------------------------------------------------
class Thumbnail(ResultModel):
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


class ThumbnailResult(ResultModel):
    width: int = 0
    height: int = 0
    thumbnail: Thumbnail = Field(default_factory=Thumbnail)


class ThumbnailDetectResult(ResultModel):
    rid: str
    result: ThumbnailResult
