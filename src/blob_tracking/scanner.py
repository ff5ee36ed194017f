# scanner.py
"""Single in-flight region scan, optionally on a worker thread."""
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional

import numpy as np

from blob_tracking.config import DetectorConfig
from blob_tracking.selector import ScanResult, scan_frame


class RegionScanner:
    """
    Runs `scan_frame` on at most one frame at a time.

    A scan stays "in flight" from `submit` until its result is collected with
    `poll`; frames submitted meanwhile are dropped. With `background=False`
    the scan runs inline and is ready on the next `poll`.
    """

    def __init__(self, background: bool = True):
        self.background = background
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None
        self.dropped_frames = 0

    @property
    def busy(self) -> bool:
        return self._future is not None

    def submit(self, frame: np.ndarray, cfg: DetectorConfig) -> bool:
        """Start a scan of a private copy of `frame`. False if one is in flight."""
        if self._future is not None:
            self.dropped_frames += 1
            return False

        snapshot = np.array(frame, copy=True)
        if self.background:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="region-scan")
            self._future = self._executor.submit(scan_frame, snapshot, cfg)
        else:
            future: Future = Future()
            try:
                future.set_result(scan_frame(snapshot, cfg))
            except Exception as exc:  # re-raised by poll()
                future.set_exception(exc)
            self._future = future
        return True

    def poll(self) -> Optional[ScanResult]:
        """Collect the finished scan, if any. Re-raises errors from the scan."""
        future = self._future
        if future is None or not future.done():
            return None
        self._future = None
        return future.result()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the in-flight scan (if any) is done."""
        future = self._future
        if future is None:
            return True
        done, _ = wait([future], timeout=timeout)
        return bool(done)

    def close(self) -> None:
        if self._future is not None:
            self._future.cancel()
            self._future = None
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None
