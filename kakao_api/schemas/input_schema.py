# -------------------------------------------------------------------
# kakao_api/schemas/input_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Closed value sets and validators for builder configuration.
#
# Every builder setter funnels its argument through one of the
# validate_* helpers below. A value outside the allowed set raises
# InvalidArgumentError BEFORE the builder is touched, so a failed
# setter leaves the prior value in place.
#
# Allowed values:
#   - response format:    json, xml
#   - coordinate systems: WGS84, WCONGNAMUL, CONGNAMUL, WTM, TM
#   - thumbnail ratios:   positive integers
#   - callback URLs:      absolute http(s) URLs
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT:
# - Hold builder state
# - Call the network
# - Describe response payloads (see output_schema.py)
# -------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Literal, get_args

from pydantic import AnyHttpUrl, PositiveInt, StrictBool, TypeAdapter, ValidationError

from kakao_api.utils.errors import InvalidArgumentError

ResponseFormat = Literal["json", "xml"]
CoordSystem = Literal["WGS84", "WCONGNAMUL", "CONGNAMUL", "WTM", "TM"]

RESPONSE_FORMATS = get_args(ResponseFormat)
COORD_SYSTEMS = get_args(CoordSystem)

_FORMAT_ADAPTER = TypeAdapter(ResponseFormat)
_COORD_ADAPTER = TypeAdapter(CoordSystem)
_RATIO_ADAPTER = TypeAdapter(PositiveInt)
_FLAG_ADAPTER = TypeAdapter(StrictBool)
_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def _validate(adapter: TypeAdapter, value: Any, message: str) -> Any:
    try:
        return adapter.validate_python(value, strict=True)
    except ValidationError as exc:
        raise InvalidArgumentError(f"{message}; got {value!r}") from exc


def validate_response_format(value: Any) -> str:
    return _validate(
        _FORMAT_ADAPTER,
        value,
        "response format must be one of: " + ", ".join(RESPONSE_FORMATS),
    )


def validate_coord_system(value: Any, *, which: str = "coordinate") -> str:
    return _validate(
        _COORD_ADAPTER,
        value,
        f"{which} coordinate system must be one of: " + ", ".join(COORD_SYSTEMS),
    )


def validate_ratio(value: Any, *, which: str = "ratio") -> int:
    return _validate(_RATIO_ADAPTER, value, f"{which} must be a positive integer")


def validate_flag(value: Any, *, which: str = "flag") -> bool:
    return _validate(_FLAG_ADAPTER, value, f"{which} must be a bool")


def validate_callback_url(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"callback URL must be a string; got {value!r}")
    try:
        _URL_ADAPTER.validate_python(value.strip())
    except ValidationError as exc:
        raise InvalidArgumentError(f"callback URL must be an absolute http(s) URL; got {value!r}") from exc
    return value.strip()


def format_coordinate(value: Any, *, which: str = "coordinate") -> str:
    """
    Render a coordinate in shortest fixed-point form.

        127.1  -> "127.1"
        1e-07  -> "0.0000001"
        37     -> "37"
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{which} must be a number; got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{which} must be a number; got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidArgumentError(f"{which} must be finite; got {value!r}")

    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
