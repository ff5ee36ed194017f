# camera.py
"""Thin VideoCapture wrapper that serves RGB frames to the tracker."""
from __future__ import annotations

import time
from typing import Optional, Tuple

import cv2
import numpy as np

from blob_tracking.config import CameraConfig


class Camera:
    def __init__(self, config: CameraConfig) -> None:
        self.config = config
        self.cap: Optional[cv2.VideoCapture] = None

        # Exposed runtime-queryable values
        self.actual_width: int = 0
        self.actual_height: int = 0
        self.actual_fps: float = 0.0
        self.actual_fourcc_str: str = ""

    # ------------------------------------------------------------------ #
    #   I N T E R N A L   H E L P E R S
    # ------------------------------------------------------------------ #
    @staticmethod
    def _get_fourcc_str(fourcc_val: int) -> str:
        if fourcc_val == 0:
            return ""
        return "".join(chr((fourcc_val >> (8 * i)) & 0xFF) for i in range(4))

    @staticmethod
    def _to_rgb(frame: np.ndarray) -> np.ndarray:
        if frame.ndim == 2 or (frame.ndim == 3 and frame.shape[2] == 1):
            return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
        if frame.ndim == 3 and frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_BGRA2RGB)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    # ------------------------------------------------------------------ #
    #   P U B L I C   A P I
    # ------------------------------------------------------------------ #
    def start(self) -> bool:
        """Open the device (or file/stream) and apply resolution/fps."""
        if self.is_active():
            return True

        backend = cv2.CAP_V4L2 if self.config.use_v4l2 else cv2.CAP_ANY
        self.cap = cv2.VideoCapture(self.config.device, backend)
        if not self.cap or not self.cap.isOpened():
            print(f"[Camera] Could not open device {self.config.device!r}")
            self.cap = None
            return False

        if self.config.fourcc_str:
            self.cap.set(
                cv2.CAP_PROP_FOURCC, cv2.VideoWriter_fourcc(*self.config.fourcc_str)
            )
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        if self.config.fps_request > 0:
            self.cap.set(cv2.CAP_PROP_FPS, self.config.fps_request)

        time.sleep(0.1)  # Let driver settle

        # -------- query what we actually got --------------------------
        self.actual_fourcc_str = self._get_fourcc_str(
            int(self.cap.get(cv2.CAP_PROP_FOURCC))
        )
        self.actual_width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.actual_height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.actual_fps = self.cap.get(cv2.CAP_PROP_FPS)

        print(
            f"[Camera] {self.actual_width}x{self.actual_height}@{self.actual_fps:.1f} FPS "
            f"(FOURCC='{self.actual_fourcc_str}')"
        )
        if self.actual_width == 0 or self.actual_height == 0:
            print("[Camera] Error: camera returned zero resolution")
            self.stop()
            return False
        return True

    def read(self) -> Tuple[float, Optional[np.ndarray]]:
        """Latest frame as an (H, W, 3) RGB array, or None."""
        ts = time.time()
        if not self.is_active():
            return ts, None
        ret, frame = self.cap.read()
        if not ret or frame is None:
            return ts, None
        return ts, self._to_rgb(frame)

    def is_active(self) -> bool:
        return bool(self.cap and self.cap.isOpened())

    def stop(self) -> None:
        if self.cap:
            print("[Camera] Releasing capture device")
            self.cap.release()
            self.cap = None

    @property
    def width(self) -> int:
        return self.actual_width

    @property
    def height(self) -> int:
        return self.actual_height

    @property
    def fps(self) -> float:
        return self.actual_fps if self.actual_fps > 0 else float(self.config.fps_request)

    # ---------------- Context / repr ---------------
    def __enter__(self) -> "Camera":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def __repr__(self) -> str:
        state = "active" if self.is_active() else "stopped"
        return f"<Camera device={self.config.device!r} ({state})>"
