"""Tests for blob_tracking.live_tuning."""
from __future__ import annotations

import json
import os
from pathlib import Path

from blob_tracking.live_tuning import RuntimeParamWatcher


def _write(path: Path, data, mtime: float) -> None:
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    os.utime(path, (mtime, mtime))


class TestRuntimeParamWatcher:
    def test_missing_file(self, tmp_path: Path):
        watcher = RuntimeParamWatcher(tmp_path / "params.json")
        assert watcher.params == {}
        assert not watcher.maybe_reload()

    def test_initial_load_and_reload(self, tmp_path: Path):
        path = tmp_path / "params.json"
        _write(path, {"color_threshold": 120}, 1_000.0)
        watcher = RuntimeParamWatcher(path)
        assert watcher.get("color_threshold") == 120
        assert not watcher.maybe_reload()

        _write(path, {"color_threshold": 90, "tracking_color": "red"}, 2_000.0)
        assert watcher.maybe_reload()
        assert watcher.get("color_threshold") == 90
        assert watcher.get("missing", "x") == "x"

    def test_bad_json_keeps_old_params(self, tmp_path: Path):
        path = tmp_path / "params.json"
        _write(path, {"min_area_size": 12}, 1_000.0)
        watcher = RuntimeParamWatcher(path)

        _write(path, "{not json", 2_000.0)
        assert not watcher.maybe_reload()
        assert watcher.get("min_area_size") == 12
        # Same broken file is not re-parsed every tick
        assert not watcher.maybe_reload()

    def test_non_object_rejected(self, tmp_path: Path):
        path = tmp_path / "params.json"
        _write(path, [1, 2, 3], 1_000.0)
        watcher = RuntimeParamWatcher(path)
        assert watcher.params == {}
