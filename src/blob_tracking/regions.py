# regions.py
"""Connected-component extraction (4-connected labeling)."""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import cv2
import numpy as np

from blob_tracking.classifier import classify_frame
from blob_tracking.common import TrackingColor
from blob_tracking.config import ColorThresholds


@dataclass(frozen=True)
class Region:
    color: TrackingColor
    area: int
    centroid_px: Tuple[float, float]  # (x, y) in image pixels
    centroid: Tuple[float, float]     # (x, y) normalized to [0, 1]


def _clamp01(v: float) -> float:
    return min(1.0, max(0.0, v))


def find_regions(
    frame: np.ndarray,
    colors: Sequence[TrackingColor],
    thresholds: ColorThresholds,
) -> List[Region]:
    """
    All 4-connected regions of `frame` matching any of `colors`.

    Colors are scanned in the given order and share one visited bitmap, so a
    pixel claimed for an earlier color is never relabeled for a later one.
    Regions come back in discovery order (color, then raster order of each
    region's first pixel, which is how OpenCV numbers its labels).
    """
    if frame.ndim != 3 or frame.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3|4) RGB(A) frame, got shape {frame.shape}")
    height, width = frame.shape[:2]
    visited = np.zeros((height, width), dtype=bool)
    regions: List[Region] = []

    for color in colors:
        mask = classify_frame(frame, color, thresholds) & ~visited
        if not mask.any():
            continue
        count, _, stats, centroids = cv2.connectedComponentsWithStats(
            mask.astype(np.uint8), connectivity=4, ltype=cv2.CV_32S
        )
        # Label 0 is the background
        for idx in range(1, count):
            cx = float(centroids[idx, 0])
            cy = float(centroids[idx, 1])
            regions.append(
                Region(
                    color=color,
                    area=int(stats[idx, cv2.CC_STAT_AREA]),
                    centroid_px=(cx, cy),
                    centroid=(_clamp01(cx / width), _clamp01(cy / height)),
                )
            )
        visited |= mask
    return regions
