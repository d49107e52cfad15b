# File helpers for the event files: .lock-guarded atomic writes, JSON and plain text

from __future__ import annotations
from pathlib import Path
import json
import os
import time
from typing import Any

from neuron_main.utils.config import CONFIG


# One writer at a time per file
def _lock_path(p: Path) -> Path:
    return p.with_suffix(p.suffix + ".lock")


def _acquire_lock(p: Path, timeout: float | None = None, poll: float = 0.05) -> None:
    if timeout is None:
        timeout = CONFIG["storage"]["lock_timeout_s"]
    lock = _lock_path(p)
    start = time.time()
    while lock.exists():
        if time.time() - start > timeout:
            # Stale lock from a crashed session
            lock.unlink(missing_ok=True)
            break
        time.sleep(poll)
    lock.parent.mkdir(parents=True, exist_ok=True)
    lock.touch(exist_ok=True)


def _release_lock(p: Path) -> None:
    _lock_path(p).unlink(missing_ok=True)


def read_text(path: str | Path) -> str | None:
    """File contents, or None when the file does not exist."""
    p = Path(path)
    if not p.exists():
        return None
    return p.read_text(encoding="utf-8")


def write_text_atomic(path: str | Path, text: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    _acquire_lock(p)
    try:
        tmp = p.with_suffix(p.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, p)
    finally:
        _release_lock(p)


def load_json(path: str | Path, default: Any) -> Any:
    """Parsed JSON, or `default` when the file is missing. Corrupt files raise ValueError."""
    raw = read_text(path)
    if raw is None:
        return default
    return json.loads(raw)


def save_json(path: str | Path, data: Any) -> None:
    write_text_atomic(path, json.dumps(data, indent=2, ensure_ascii=False))
