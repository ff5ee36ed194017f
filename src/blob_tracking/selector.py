# selector.py
"""Pick the single largest qualifying region of a frame."""
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from blob_tracking.classifier import colors_for_mode
from blob_tracking.config import DetectorConfig
from blob_tracking.regions import Region, find_regions


@dataclass(frozen=True)
class ScanResult:
    region: Optional[Region]   # Accepted candidate, None = "no target"
    largest_area: int          # Largest area seen, accepted or not
    region_count: int
    frame_size: Tuple[int, int]
    duration_s: float


def select_candidate(regions: Iterable[Region], min_area: int) -> Optional[Region]:
    # Strict '>' keeps the earlier-scanned region on an exact tie
    best: Optional[Region] = None
    for region in regions:
        if best is None or region.area > best.area:
            best = region
    if best is None or best.area < min_area:
        return None
    return best


def scan_frame(frame: np.ndarray, cfg: DetectorConfig) -> ScanResult:
    """Classify, label and select on one frame snapshot."""
    tic = time.perf_counter()
    regions = find_regions(frame, colors_for_mode(cfg.tracking_color), cfg.thresholds)
    largest = max((r.area for r in regions), default=0)
    return ScanResult(
        region=select_candidate(regions, cfg.min_area_size),
        largest_area=largest,
        region_count=len(regions),
        frame_size=(frame.shape[1], frame.shape[0]),
        duration_s=time.perf_counter() - tic,
    )
