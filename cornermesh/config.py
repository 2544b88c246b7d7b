# cornermesh/config.py
"""
JSON box descriptions.

    {
      "width": 2000, "height": 500, "depth": 1000,
      "corners": {
        "near-left":  {"radius": 400, "segments": 90},
        "far-right":  {"radius": 120, "segments": 90}
      }
    }

Corners left out are sharp.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Tuple

from .params import BoxSpec, Corner, CornerMap, CornerSpec, corners_from

# the demo box: every corner rounded, all radii different
SAMPLE_BOX = BoxSpec(2000.0, 500.0, 1000.0)
SAMPLE_CORNERS: Dict[Corner, CornerSpec] = {
    Corner.NEAR_LEFT: CornerSpec(400.0, 90),
    Corner.FAR_LEFT: CornerSpec(200.0, 90),
    Corner.NEAR_RIGHT: CornerSpec(500.0, 90),
    Corner.FAR_RIGHT: CornerSpec(120.0, 90),
}


def _number(data: Mapping[str, Any], key: str, default: Any = None) -> float:
    if key not in data:
        if default is None:
            raise ValueError(f"Missing required key: {key}")
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number (got {value!r})")
    return value


def corner_from_dict(data: Mapping[str, Any]) -> CornerSpec:
    if not isinstance(data, Mapping):
        raise ValueError(f"Corner entry must be an object (got {data!r})")
    radius = float(_number(data, "radius", 0.0))
    segments = _number(data, "segments", 0)
    if int(segments) != segments:
        raise ValueError(f"segments must be an integer (got {segments!r})")
    return CornerSpec(radius, int(segments))


def config_from_dict(data: Mapping[str, Any]) -> Tuple[BoxSpec, CornerMap]:
    if not isinstance(data, Mapping):
        raise ValueError("Configuration must be a JSON object")
    box = BoxSpec(float(_number(data, "width")), float(_number(data, "height")), float(_number(data, "depth")))
    raw = data.get("corners", {})
    if not isinstance(raw, Mapping):
        raise ValueError("corners must be an object keyed by corner name")
    return box, corners_from({Corner.parse(name): corner_from_dict(spec) for name, spec in raw.items()})


def load_config(path: str) -> Tuple[BoxSpec, CornerMap]:
    with open(path, "r", encoding="utf-8") as f:
        return config_from_dict(json.load(f))
