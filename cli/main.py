# main.py
"""
Entry-point for the color-blob tracking system.

Live-tuning
-----------
While the program is running you can edit ``runtime_params.json`` and the new
values (color mode, thresholds, debounce, smoothing) will take effect on the
very next tick.  See ``blob_tracking/live_tuning.py`` for details.

Example ``runtime_params.json``::

    {"tracking_color": "green", "color_threshold": 120, "min_area_size": 25}
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from blob_tracking.camera import Camera
from blob_tracking.common import FrameSourceError, TrackingColor
from blob_tracking.config import TrackingSettings, load_config
from blob_tracking.live_tuning import RuntimeParamWatcher
from blob_tracking.processor import ColorBlobTracker
from blob_tracking.targets import PointTarget


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track a colored blob and print its 3D target")
    parser.add_argument("--config", help="JSON settings file (sections: camera, detector, ...)")
    parser.add_argument("--device", help="Camera index, video file or stream URL")
    parser.add_argument("--color", choices=[c.value for c in TrackingColor], help="Tracking color")
    parser.add_argument("--params", default="runtime_params.json", help="Live-tuning JSON file")
    parser.add_argument("--ticks", type=int, default=None, help="Stop after N ticks")
    parser.add_argument("--debug", action="store_true", help="Print every scan result")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> TrackingSettings:
    settings = load_config(args.config) if args.config else TrackingSettings()
    if args.device is not None:
        device = int(args.device) if args.device.isdigit() else args.device
        settings.camera = replace(settings.camera, device=device)
    if args.color:
        settings.detector = replace(settings.detector, tracking_color=TrackingColor.parse(args.color))
    if args.debug:
        settings.tracker = replace(settings.tracker, show_debug_info=True)
    return settings


# ────────────────────────────────────────────────────────────────────────────
#   M A I N
# ────────────────────────────────────────────────────────────────────────────
def main(argv=None) -> int:
    args = parse_arguments(argv)
    print("Initializing Color-Blob Tracking System…")
    print(f"Hint: edit '{args.params}' at any time to tweak parameters.\n")

    settings = _settings_from_args(args)
    cam_cfg, det_cfg, map_cfg = settings.camera, settings.detector, settings.mapping

    # ------------------------ Banner ----------------------
    print(
        f"Camera: device={cam_cfg.device!r}, "
        f"{cam_cfg.width}x{cam_cfg.height}@{cam_cfg.fps_request} FPS"
    )
    print(
        f"Detector: mode={det_cfg.tracking_color.label}, "
        f"thresholds={det_cfg.thresholds}, min_area={det_cfg.min_area_size}px"
    )
    print(
        f"Mapping: Y=({map_cfg.min_y}, {map_cfg.surface_y}, {map_cfg.max_y}), "
        f"areas=({map_cfg.min_area}, {map_cfg.surface_area}, {map_cfg.max_area})x{map_cfg.area_unit}, "
        f"bounds={map_cfg.bounds}"
    )

    # ------------------------ Run -------------------------
    target = PointTarget()
    tracker = ColorBlobTracker.from_settings(
        settings, frame_source=Camera(cam_cfg), target=target
    )
    try:
        tracker.run(max_ticks=args.ticks, watcher=RuntimeParamWatcher(args.params))
    except FrameSourceError as exc:
        print(f"[Main] {exc}")
        return 1
    print(f"Final target position: {target}")
    print("Main program finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
