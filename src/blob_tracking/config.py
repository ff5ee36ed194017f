# config.py
"""Typed configuration blobs for the whole system."""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple

from blob_tracking.common import TrackingColor


# ---------------------- Camera ----------------------
@dataclass
class CameraConfig:
    device: int | str = 0              # Index, file path or stream URL
    width: int = 640
    height: int = 480
    fps_request: int = 30
    use_v4l2: bool = False
    fourcc_str: str = ""


# --------------------- Detector ---------------------
@dataclass(frozen=True)
class ColorThresholds:
    brightness: int = 100   # Target channel must exceed this (0‒255)
    dominance: int = 50     # ...and beat every other channel by this margin
    black: int = 30         # Other channels below this count as "dark"


@dataclass
class DetectorConfig:
    tracking_color: TrackingColor = TrackingColor.AUTO
    thresholds: ColorThresholds = field(default_factory=ColorThresholds)
    min_area_size: int = 9  # Minimum pixel count of an accepted region


# ----------------------- Gate -----------------------
@dataclass
class GateConfig:
    update_interval_s: float = 0.05
    min_movement: float = 0.01  # Normalized image units


# --------------------- Smoothing --------------------
@dataclass
class SmoothingConfig:
    position_factor: float = 0.5  # 0 = no smoothing, →1 = heavy lag
    size_factor: float = 0.5


# ---------------------- Mapping ---------------------
@dataclass(frozen=True)
class MappingConfig:
    min_y: float = 0.0
    surface_y: float = 1.5
    max_y: float = 5.0
    # Area breakpoints, in multiples of `area_unit` pixels
    min_area: float = 9
    surface_area: float = 40
    max_area: float = 100
    area_unit: float = 1000
    y_offset_compensation: float = 0.1
    xz_offset_compensation: float = 0.4
    bounds: Tuple[float, float] = (5.0, 5.0)  # World-space half extents (x, z)
    approach_speed: float = 5.0


# ---------------------- Tracker ---------------------
@dataclass
class TrackerConfig:
    background_scan: bool = True
    show_debug_info: bool = False


@dataclass
class TrackingSettings:
    camera: CameraConfig = field(default_factory=CameraConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    gate: GateConfig = field(default_factory=GateConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    mapping: MappingConfig = field(default_factory=MappingConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)


# ----------------------- Loading --------------------
def _build(cls, section: str, values: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown key(s) in [{section}]: {', '.join(sorted(unknown))}")
    return cls(**values)


def settings_from_dict(data: Dict[str, Any]) -> TrackingSettings:
    """Build a settings bundle from a plain dict (e.g. parsed JSON)."""
    unknown = set(data) - {f.name for f in fields(TrackingSettings)}
    if unknown:
        raise ValueError(f"Unknown config section(s): {', '.join(sorted(unknown))}")

    detector = dict(data.get("detector", {}))
    if "tracking_color" in detector:
        detector["tracking_color"] = TrackingColor.parse(detector["tracking_color"])
    if "thresholds" in detector:
        detector["thresholds"] = _build(ColorThresholds, "detector.thresholds", detector["thresholds"])

    mapping = dict(data.get("mapping", {}))
    if "bounds" in mapping:
        mapping["bounds"] = tuple(float(v) for v in mapping["bounds"])

    return TrackingSettings(
        camera=_build(CameraConfig, "camera", data.get("camera", {})),
        detector=_build(DetectorConfig, "detector", detector),
        gate=_build(GateConfig, "gate", data.get("gate", {})),
        smoothing=_build(SmoothingConfig, "smoothing", data.get("smoothing", {})),
        mapping=_build(MappingConfig, "mapping", mapping),
        tracker=_build(TrackerConfig, "tracker", data.get("tracker", {})),
    )


def load_config(path: str | Path) -> TrackingSettings:
    with Path(path).expanduser().open("r", encoding="utf-8") as fp:
        return settings_from_dict(json.load(fp))


def with_thresholds(cfg: DetectorConfig, **changes: int) -> DetectorConfig:
    """Copy of `cfg` with some classification thresholds replaced."""
    return replace(cfg, thresholds=replace(cfg.thresholds, **changes))
