"""
kakao_api/utils/result_persistence.py

WHAT THIS FILE IS FOR
---------------------
Rendering and persisting decoded results.

- to_json():  2-space pretty JSON, keys exactly as the API documents them
- to_xml():   2-space pretty XML rooted at the result's declared root tag
- xml_to_dict(): the inverse used when decoding XML response bodies
- save_as():  pick a serializer from the filename extension and write

EXTENSION RULES
---------------
    .json -> to_json (every result)
    .xml  -> to_xml  (only results that declare an XML root)
    other -> UnsupportedFormatError, nothing written

XML SHAPE
---------
Dicts become nested elements, lists repeat the element tag once per
item, scalars become text:

    <result>
      <meta>
        <total_count>1</total_count>
      </meta>
      <documents>
        <region_type>H</region_type>
        ...
      </documents>
    </result>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from pydantic import BaseModel

from kakao_api.utils.errors import UnsupportedFormatError

PathLike = Union[str, Path]


def to_json(model: BaseModel) -> str:
    return model.model_dump_json(indent=2)


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            _append(parent, tag, item)
        return

    child = ET.SubElement(parent, tag)
    if isinstance(value, dict):
        for key, inner in value.items():
            _append(child, key, inner)
    elif isinstance(value, bool):
        child.text = "true" if value else "false"
    elif value is not None:
        child.text = str(value)


def to_xml(model: BaseModel, root_tag: str) -> str:
    root = ET.Element(root_tag)
    for key, value in model.model_dump(mode="json").items():
        _append(root, key, value)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")


def xml_to_dict(element: ET.Element) -> Dict[str, Any]:
    """
    Convert an element's children into a plain dict.

    Leaf elements become their text ("" when empty); repeated tags are
    collected into a list. Single occurrences stay scalar/dict, so list
    fields must accept one item as well as many.
    """
    out: Dict[str, Any] = {}
    for child in element:
        value: Any = xml_to_dict(child) if len(child) else (child.text or "").strip()
        if child.tag in out:
            existing = out[child.tag]
            if not isinstance(existing, list):
                out[child.tag] = [existing]
            out[child.tag].append(value)
        else:
            out[child.tag] = value
    return out


def extension_of(filename: PathLike) -> str:
    return Path(filename).suffix.lower().lstrip(".")


def save_as(
    model: BaseModel,
    filename: PathLike,
    *,
    xml_root: Optional[str] = None,
) -> Path:
    """
    Serialize `model` by extension and write it to `filename`.

    Raises:
        UnsupportedFormatError: before touching the filesystem.
    """
    ext = extension_of(filename)
    supported: Iterable[str] = ("json", "xml") if xml_root else ("json",)

    if ext == "json":
        payload = to_json(model)
    elif ext == "xml" and xml_root:
        payload = to_xml(model, xml_root)
    else:
        raise UnsupportedFormatError(
            f"cannot save {type(model).__name__} as {str(filename)!r}; "
            f"supported extensions: {', '.join('.' + s for s in supported)}"
        )

    path = Path(filename)
    path.write_text(payload + "\n", encoding="utf-8")
    return path
