# live_tuning.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Tuple


class RuntimeParamWatcher:
    """Watch a JSON file and hot-reload its contents when it changes."""

    def __init__(self, path: str | Path = "runtime_params.json") -> None:
        self.path = Path(path).expanduser().resolve()
        self._stamp: Tuple[float, int] = (0.0, -1)  # (mtime, size)
        self.params: Dict[str, Any] = {}

        print(f"[Runtime] Watching: {self.path}")
        self._load(initial=True)

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _load(self, *, initial: bool = False) -> bool:
        try:
            stat = self.path.stat()
            self._stamp = (stat.st_mtime, stat.st_size)
            with self.path.open("r", encoding="utf-8") as fp:
                params = json.load(fp)
        except FileNotFoundError:
            if initial:
                print(
                    f"[Runtime] {self.path} not found – live-tuning disabled "
                    "(create the file to enable)."
                )
            else:
                print(f"[Runtime] {self.path} was deleted – keeping old params.")
            return False
        except (OSError, json.JSONDecodeError) as exc:
            print(f"[Runtime] Failed to load {self.path}: {exc}")
            return False

        if not isinstance(params, dict):
            print(f"[Runtime] {self.path} must hold a JSON object – keeping old params.")
            return False
        self.params = params
        if not initial:
            print(f"[Runtime] Reloaded parameters from {self.path}")
        return True

    # ------------------------------------------------------------------
    #   Public API
    # ------------------------------------------------------------------
    def maybe_reload(self) -> bool:
        """
        If the watched file changed since the last successful load, reload it
        and return **True** when new parameters were taken, else **False**.
        """
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return False

        mtime, fsize = self._stamp
        if stat.st_size != fsize or stat.st_mtime != mtime:
            return self._load()
        return False

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.params.get(key, default)
