"""Color-blob tracking package – re-export high-level API."""
from .common import FrameSourceError, TrackerStatus, TrackingColor  # noqa: F401
from .config import (                                               # noqa: F401
    CameraConfig, ColorThresholds, DetectorConfig, GateConfig,
    MappingConfig, SmoothingConfig, TrackerConfig, TrackingSettings,
    load_config,
)
from .processor import ColorBlobTracker                             # noqa: F401
from .targets import PointTarget, TargetSink                        # noqa: F401
