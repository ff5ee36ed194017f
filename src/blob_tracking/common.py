# common.py
"""Objects that are shared across multiple modules."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FrameSourceError(RuntimeError):
    """Raised when the tracker has no usable frame source."""


class TrackingColor(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    AUTO = "auto"

    @classmethod
    def parse(cls, value: "str | TrackingColor") -> "TrackingColor":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown tracking color {value!r} (expected one of {names})") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class TrackerStatus:
    """
    Read-only diagnostic snapshot of the tracker after one tick.
    Positions are normalized image coordinates; `target_position` is world space.
    """
    time_s: float
    position: Tuple[float, float]
    size: int
    detected_color: TrackingColor
    has_target: bool
    debouncing: bool
    target_position: Optional[Tuple[float, float, float]]
    scan_in_flight: bool
    last_scan_ms: float
