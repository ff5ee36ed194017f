# mapper.py
"""Smoothed blob (position, size) → 3D world coordinate."""
import math
from typing import Tuple

from blob_tracking.config import MappingConfig
from blob_tracking.helpers import SmoothedState, clamp01, inverse_lerp, lerp, lerp_point

Vec3 = Tuple[float, float, float]


class PositionMapper:
    """
    Two-branch mapping around the "surface" area breakpoint.

    A small blob is far from the camera: Y runs from `max_y` up to
    `surface_y` as the blob grows to the surface area. A blob larger than the
    surface area continues from `surface_y` to `min_y`. Off-center blobs get
    a Y correction proportional to their squared distance from the frame
    center (added below the surface, subtracted above it).

    X/Z are a linear map of the normalized position into `bounds`, widened
    towards the frame edge by `xz_offset_compensation` to approximate the
    camera's perspective. The image is mirrored horizontally.
    """

    def __init__(self, cfg: MappingConfig):
        self.cfg = cfg
        unit = cfg.area_unit
        self._surface_area_px = cfg.surface_area * unit
        self._sqrt_min = math.sqrt(cfg.min_area * unit)
        self._sqrt_surface = math.sqrt(cfg.surface_area * unit)
        self._sqrt_max = math.sqrt(cfg.max_area * unit)
        self._surface_fraction = (cfg.surface_y - cfg.min_y) / (cfg.max_y - cfg.min_y)

    # ----------------- Private helpers -----------------
    def _height(self, size: float, distance_sq: float) -> Tuple[float, float]:
        """Returns (y, lateral_fraction)."""
        cfg = self.cfg
        root = math.sqrt(max(size, 0.0))
        offset = distance_sq * cfg.y_offset_compensation
        if size <= self._surface_area_px:
            n = inverse_lerp(self._sqrt_min, self._sqrt_surface, root)
            y = lerp(cfg.max_y, cfg.surface_y, n) + offset
            fraction = lerp(self._surface_fraction, 0.0, n)
        else:
            n = inverse_lerp(self._sqrt_surface, self._sqrt_max, root)
            y = lerp(cfg.surface_y, cfg.min_y, n) - offset
            fraction = lerp(1.0, self._surface_fraction, n)
        return y, fraction

    def _spread(self, p: float, fraction: float) -> float:
        return clamp01(0.5 + (p - 0.5) * (1.0 + self.cfg.xz_offset_compensation * fraction))

    # ------------------ Public API --------------------
    def map(self, smoothed: SmoothedState) -> Vec3:
        y, fraction = self._height(smoothed.size, smoothed.distance_to_center_sq)
        bx, bz = self.cfg.bounds
        px, py = smoothed.position
        x = lerp(bx, -bx, self._spread(px, fraction))
        z = lerp(-bz, bz, self._spread(py, fraction))
        return (x, y, z)

    def approach(self, current: Vec3, target: Vec3, elapsed_s: float) -> Vec3:
        """Frame-rate independent exponential step from `current` to `target`."""
        return lerp_point(current, target, self.cfg.approach_speed * elapsed_s)
