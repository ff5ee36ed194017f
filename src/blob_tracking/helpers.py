# helpers.py
"""Interpolation helpers and the per-tick exponential smoother."""
from dataclasses import dataclass
from typing import Tuple

from blob_tracking.config import SmoothingConfig
from blob_tracking.tracker import TrackState

_CENTER = (0.5, 0.5)


def clamp01(t: float) -> float:
    return min(1.0, max(0.0, t))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with `t` clamped to [0, 1]."""
    return a + (b - a) * clamp01(t)


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Fraction of the way `value` lies from `a` to `b`, clamped to [0, 1]."""
    if a == b:
        return 0.0
    return clamp01((value - a) / (b - a))


def lerp_point(a: Tuple[float, ...], b: Tuple[float, ...], t: float) -> Tuple[float, ...]:
    return tuple(lerp(pa, pb, t) for pa, pb in zip(a, b))


@dataclass
class SmoothedState:
    position: Tuple[float, float] = _CENTER
    size: int = 0
    distance_to_center_sq: float = 0.0


class TemporalSmoother:
    """
    Two independent exponential filters, one for position, one for size.
    Runs every tick against the committed track, stale or not.
    """

    def __init__(self, cfg: SmoothingConfig):
        self.cfg = cfg

    def update(self, smoothed: SmoothedState, track: TrackState) -> SmoothedState:
        smoothed.position = lerp_point(
            smoothed.position, track.position, 1.0 - self.cfg.position_factor
        )
        dx = smoothed.position[0] - _CENTER[0]
        dy = smoothed.position[1] - _CENTER[1]
        smoothed.distance_to_center_sq = dx * dx + dy * dy

        smoothed.size = int(round(lerp(smoothed.size, track.area, 1.0 - self.cfg.size_factor)))
        return smoothed
