# processor.py
"""Glue logic that wires frame source → scanner → gate → smoother → target."""
from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Dict, Optional, Protocol, Tuple

import numpy as np

from blob_tracking.common import FrameSourceError, TrackerStatus, TrackingColor
from blob_tracking.config import (
    DetectorConfig,
    GateConfig,
    MappingConfig,
    SmoothingConfig,
    TrackerConfig,
    TrackingSettings,
    with_thresholds,
)
from blob_tracking.helpers import SmoothedState, TemporalSmoother
from blob_tracking.live_tuning import RuntimeParamWatcher
from blob_tracking.mapper import PositionMapper
from blob_tracking.scanner import RegionScanner
from blob_tracking.selector import ScanResult
from blob_tracking.targets import TargetSink
from blob_tracking.tracker import TrackState, UpdateGate


class FrameSource(Protocol):
    width: int
    height: int
    fps: float

    def start(self) -> bool: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...

    def read(self) -> Tuple[float, Optional[np.ndarray]]: ...


# Live-tuning key → ColorThresholds field
_THRESHOLD_KEYS = {
    "color_threshold": "brightness",
    "dominance_threshold": "dominance",
    "black_threshold": "black",
}
_GATE_KEYS = ("update_interval_s", "min_movement")
_SMOOTHING_KEYS = ("position_factor", "size_factor")


class ColorBlobTracker:
    """The main high-level orchestrator; the caller owns the tick loop."""

    def __init__(
        self,
        detector_cfg: DetectorConfig,
        gate_cfg: GateConfig,
        smoothing_cfg: SmoothingConfig,
        mapping_cfg: MappingConfig,
        tracker_cfg: Optional[TrackerConfig] = None,
        *,
        frame_source: Optional[FrameSource] = None,
        target: Optional[TargetSink] = None,
    ):
        # Save configs
        self.detector_cfg = detector_cfg
        self.gate_cfg = gate_cfg
        self.smoothing_cfg = smoothing_cfg
        self.mapping_cfg = mapping_cfg
        self.tracker_cfg = tracker_cfg or TrackerConfig()

        # Collaborators
        self.frame_source = frame_source
        self.target = target

        # Build sub-systems
        self.scanner = RegionScanner(background=self.tracker_cfg.background_scan)
        self.gate = UpdateGate(gate_cfg)
        self.smoother = TemporalSmoother(smoothing_cfg)
        self.mapper = PositionMapper(mapping_cfg)

        # Persistent state
        self.track = TrackState(area=detector_cfg.min_area_size)
        self.smoothed = SmoothedState(size=detector_cfg.min_area_size)
        self.target_position: Optional[Tuple[float, float, float]] = None

        # Runtime bookkeeping
        self.clock = 0.0
        self.total_ticks = 0
        self.last_scan_ms = 0.0
        self._stopped = False

    @classmethod
    def from_settings(
        cls,
        settings: TrackingSettings,
        *,
        frame_source: Optional[FrameSource] = None,
        target: Optional[TargetSink] = None,
    ) -> "ColorBlobTracker":
        return cls(
            settings.detector,
            settings.gate,
            settings.smoothing,
            settings.mapping,
            settings.tracker,
            frame_source=frame_source,
            target=target,
        )

    # ---------------------------------------------------------------------
    #                         Setup / teardown
    # ---------------------------------------------------------------------
    def start(self) -> None:
        """Acquire the frame source. Raises FrameSourceError if there is none."""
        if self.frame_source is None:
            raise FrameSourceError("No frame source configured")
        if not self.frame_source.start():
            raise FrameSourceError(f"Frame source {self.frame_source!r} failed to start")
        self._stopped = False
        print(
            f"[Tracker] Started: {self.frame_source.width}x{self.frame_source.height}"
            f"@{self.frame_source.fps:.1f}, mode={self.detector_cfg.tracking_color.label}"
        )

    def stop(self) -> None:
        """Cancel the in-flight scan, then release the frame source."""
        if self._stopped:
            return
        self._stopped = True
        self.scanner.close()
        if self.frame_source is not None:
            self.frame_source.stop()
        print(f"[Tracker] Stopped. Total ticks: {self.total_ticks}")

    def __enter__(self) -> "ColorBlobTracker":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    # ---------------------------------------------------------------------
    #                         Per-tick pipeline
    # ---------------------------------------------------------------------
    def _apply_scan(self, result: ScanResult) -> None:
        self.last_scan_ms = result.duration_s * 1000.0
        region = result.region
        if region is None:
            self.track.has_target = False
            if self.tracker_cfg.show_debug_info:
                print(
                    f"[Tracker] No significant color area found "
                    f"(largest {result.largest_area} px)"
                )
            return

        self.track.has_target = True
        committed = self.gate.offer(self.track, region, self.clock)
        if self.tracker_cfg.show_debug_info:
            cx, cy = region.centroid_px
            print(
                f"[Tracker] {region.color.label} area found at ({cx:.1f}, {cy:.1f}) "
                f"with {region.area} pixels{'' if committed else ' (debounced)'}"
            )

    def _move_target(self, elapsed_s: float) -> None:
        self.target_position = self.mapper.map(self.smoothed)
        if self.target is None:
            return
        current = self.target.get_position()
        self.target.set_position(
            self.mapper.approach(current, self.target_position, elapsed_s)
        )

    def tick(self, frame: Optional[np.ndarray], elapsed_s: float) -> TrackerStatus:
        """
        Advance the tracker by one tick.

        A missing frame skips the tick without touching any state. Otherwise
        the frame is handed to the scanner (dropped if a scan is in flight), a
        finished scan is pushed through the selector result and update gate,
        and smoothing + mapping run on the committed state.
        """
        if frame is None or self._stopped:
            return self.status()

        self.clock += elapsed_s
        self.scanner.submit(frame, self.detector_cfg)
        result = self.scanner.poll()
        if result is not None:
            self._apply_scan(result)

        self.smoother.update(self.smoothed, self.track)
        self._move_target(elapsed_s)
        self.total_ticks += 1
        return self.status()

    def update(self, elapsed_s: float) -> TrackerStatus:
        """Tick with the frame source's latest frame."""
        if self.frame_source is None or not self.frame_source.is_active():
            return self.status()
        _, frame = self.frame_source.read()
        return self.tick(frame, elapsed_s)

    def status(self) -> TrackerStatus:
        return TrackerStatus(
            time_s=self.clock,
            position=self.smoothed.position,
            size=self.smoothed.size,
            detected_color=self.track.detected_color,
            has_target=self.track.has_target,
            debouncing=self.gate.is_debouncing(self.track, self.clock),
            target_position=self.target_position,
            scan_in_flight=self.scanner.busy,
            last_scan_ms=self.last_scan_ms,
        )

    # ---------------------------------------------------------------------
    #                          Live tuning
    # ---------------------------------------------------------------------
    def apply_runtime_params(self, params: Dict[str, Any]) -> None:
        """Apply detector/gate/smoothing overrides. Mapping stays fixed."""
        detector = self.detector_cfg
        if "tracking_color" in params:
            detector = replace(detector, tracking_color=TrackingColor.parse(params["tracking_color"]))
        if "min_area_size" in params:
            detector = replace(detector, min_area_size=int(params["min_area_size"]))
        thresholds = {
            attr: int(params[key]) for key, attr in _THRESHOLD_KEYS.items() if key in params
        }
        if thresholds:
            detector = with_thresholds(detector, **thresholds)
        self.detector_cfg = detector

        gate = {k: float(params[k]) for k in _GATE_KEYS if k in params}
        if gate:
            self.gate_cfg = replace(self.gate_cfg, **gate)
            self.gate.cfg = self.gate_cfg

        smoothing = {k: float(params[k]) for k in _SMOOTHING_KEYS if k in params}
        if smoothing:
            self.smoothing_cfg = replace(self.smoothing_cfg, **smoothing)
            self.smoother.cfg = self.smoothing_cfg

    # ---------------------------------------------------------------------
    #                             Public run()
    # ---------------------------------------------------------------------
    def run(
        self,
        max_ticks: Optional[int] = None,
        watcher: Optional[RuntimeParamWatcher] = None,
        report_interval_s: float = 1.0,
    ) -> None:
        """Simple fixed-rate loop around `update()` until the source ends."""
        self.start()
        period = 1.0 / self.frame_source.fps if self.frame_source.fps > 0 else 1.0 / 30
        last = time.monotonic()
        last_report = last
        ticks = 0
        try:
            while self.frame_source.is_active():
                if max_ticks is not None and ticks >= max_ticks:
                    break
                if watcher is not None and watcher.maybe_reload():
                    self.apply_runtime_params(watcher.params)

                now = time.monotonic()
                status = self.update(now - last)
                last = now
                ticks += 1

                if now - last_report >= report_interval_s:
                    last_report = now
                    self._report(status)

                spare = period - (time.monotonic() - now)
                if spare > 0:
                    time.sleep(spare)
        except KeyboardInterrupt:
            print("\n[Tracker] Stopped by user.")
        finally:
            self.stop()

    @staticmethod
    def _report(status: TrackerStatus) -> None:
        px, py = status.position
        coord = (
            "({:.2f}, {:.2f}, {:.2f})".format(*status.target_position)
            if status.target_position
            else "-"
        )
        print(
            f"[Tracker] {status.detected_color.label} pos=({px:.2f}, {py:.2f}) "
            f"size={status.size}px target={'yes' if status.has_target else 'no'} "
            f"{'Debouncing' if status.debouncing else 'Ready for update'} "
            f"scan={status.last_scan_ms:.1f}ms -> {coord}"
        )
