# classifier.py
"""Per-pixel color test, scalar and vectorized."""
from typing import Dict, Sequence, Tuple

import numpy as np

from blob_tracking.common import TrackingColor
from blob_tracking.config import ColorThresholds

# (target, other, other) channel indices into an RGB sample
_CHANNELS: Dict[TrackingColor, Tuple[int, int, int]] = {
    TrackingColor.RED: (0, 1, 2),
    TrackingColor.GREEN: (1, 0, 2),
    TrackingColor.BLUE: (2, 0, 1),
}

_AUTO_ORDER = (TrackingColor.RED, TrackingColor.GREEN, TrackingColor.BLUE)


def colors_for_mode(mode: TrackingColor) -> Tuple[TrackingColor, ...]:
    """Scan order for a tracking mode: Auto tries Red, Green, Blue."""
    if mode is TrackingColor.AUTO:
        return _AUTO_ORDER
    return (mode,)


def classify(pixel: Sequence[int], color: TrackingColor, thresholds: ColorThresholds) -> bool:
    """
    True if `pixel` (R, G, B[, A]) belongs to `color`.

    A pixel matches when the target channel is bright and dominates both other
    channels, or when both other channels are near black and the target
    channel still beats them (shadowed instances of the color).
    """
    idx = _CHANNELS.get(color)
    if idx is None:
        return False
    target, a, b = (int(pixel[i]) for i in idx)

    dark = a < thresholds.black and b < thresholds.black and target > a and target > b
    bright = (
        target > thresholds.brightness
        and target > a + thresholds.dominance
        and target > b + thresholds.dominance
    )
    return dark or bright


def classify_frame(frame: np.ndarray, color: TrackingColor, thresholds: ColorThresholds) -> np.ndarray:
    """Boolean (H, W) mask, equal to `classify` applied to every pixel."""
    if frame.ndim != 3 or frame.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3|4) RGB(A) frame, got shape {frame.shape}")

    idx = _CHANNELS.get(color)
    if idx is None:
        return np.zeros(frame.shape[:2], dtype=bool)

    # int16 so `other + dominance` cannot wrap around like uint8 would
    rgb = frame[..., :3].astype(np.int16)
    target, a, b = (rgb[..., i] for i in idx)

    dark = (a < thresholds.black) & (b < thresholds.black) & (target > a) & (target > b)
    bright = (
        (target > thresholds.brightness)
        & (target > a + thresholds.dominance)
        & (target > b + thresholds.dominance)
    )
    return dark | bright
