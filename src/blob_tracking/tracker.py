# tracker.py
"""Committed track state and the time + distance debounce gate."""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from blob_tracking.common import TrackingColor
from blob_tracking.config import GateConfig
from blob_tracking.regions import Region


@dataclass
class TrackState:
    position: Tuple[float, float] = (0.5, 0.5)
    area: int = 0
    last_commit_time: Optional[float] = None
    detected_color: TrackingColor = TrackingColor.RED
    has_target: bool = False


class UpdateGate:
    """
    Debounces detections: a candidate is committed only if enough time has
    passed since the previous commit *and* it moved far enough from it.
    """

    def __init__(self, cfg: GateConfig):
        self.cfg = cfg

    # ----------------- Private helpers -----------------
    def _time_ok(self, state: TrackState, now: float) -> bool:
        if state.last_commit_time is None:
            return True
        return now - state.last_commit_time >= self.cfg.update_interval_s

    def _moved_enough(self, state: TrackState, position: Tuple[float, float]) -> bool:
        dx = position[0] - state.position[0]
        dy = position[1] - state.position[1]
        return math.hypot(dx, dy) >= self.cfg.min_movement

    # ------------------ Public API --------------------
    def should_commit(self, state: TrackState, position: Tuple[float, float], now: float) -> bool:
        return self._time_ok(state, now) and self._moved_enough(state, position)

    def offer(self, state: TrackState, region: Region, now: float) -> bool:
        """Commit `region` into `state` if the gate allows. Returns True on commit."""
        if not self.should_commit(state, region.centroid, now):
            return False
        state.position = region.centroid
        state.area = region.area
        state.detected_color = region.color
        state.last_commit_time = now
        return True

    def is_debouncing(self, state: TrackState, now: float) -> bool:
        return not self._time_ok(state, now)
