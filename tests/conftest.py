"""Shared fixtures for the blob tracking test suite."""
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pytest

from blob_tracking.config import (
    DetectorConfig,
    GateConfig,
    MappingConfig,
    SmoothingConfig,
    TrackerConfig,
)
from blob_tracking.processor import ColorBlobTracker

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def blank_frame(width: int = 320, height: int = 240, channels: int = 3) -> np.ndarray:
    return np.zeros((height, width, channels), dtype=np.uint8)


def paint(frame: np.ndarray, x: int, y: int, w: int, h: int, rgb: Tuple[int, int, int]) -> np.ndarray:
    """Fill the w×h block whose top-left pixel is (x, y)."""
    frame[y:y + h, x:x + w, :3] = rgb
    return frame


class FakeFrameSource:
    """Replays a list of frames; records start/stop calls."""

    def __init__(self, frames: List[Optional[np.ndarray]], start_ok: bool = True):
        self.frames = list(frames)
        self.start_ok = start_ok
        self.active = False
        self.start_calls = 0
        self.stop_calls = 0
        self.width = frames[0].shape[1] if frames and frames[0] is not None else 0
        self.height = frames[0].shape[0] if frames and frames[0] is not None else 0
        self.fps = 1000.0

    def start(self) -> bool:
        self.start_calls += 1
        self.active = self.start_ok
        return self.start_ok

    def stop(self) -> None:
        self.stop_calls += 1
        self.active = False

    def is_active(self) -> bool:
        return self.active and bool(self.frames)

    def read(self):
        return 0.0, self.frames.pop(0)


@pytest.fixture
def detector_cfg() -> DetectorConfig:
    return DetectorConfig()


@pytest.fixture
def make_tracker():
    """Factory for an inline-scanning tracker; keyword overrides per config."""

    def _make(
        detector: Optional[DetectorConfig] = None,
        gate: Optional[GateConfig] = None,
        smoothing: Optional[SmoothingConfig] = None,
        mapping: Optional[MappingConfig] = None,
        background: bool = False,
        **kwargs,
    ) -> ColorBlobTracker:
        return ColorBlobTracker(
            detector or DetectorConfig(),
            gate or GateConfig(),
            smoothing or SmoothingConfig(),
            mapping or MappingConfig(),
            TrackerConfig(background_scan=background),
            **kwargs,
        )

    return _make
