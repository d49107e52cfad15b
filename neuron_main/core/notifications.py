# Transient notifications (toasts) for the renderer.
# The core only queues them; the renderer drains and displays.

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional

from neuron_main.utils.config import CONFIG


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = "info"              # info | warning | error
    code: Optional[str] = None
    at: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


class NotificationCenter:
    def __init__(self, max_pending: Optional[int] = None):
        if max_pending is None:
            max_pending = CONFIG["notifications"]["max_pending"]
        # Oldest toasts fall off when the renderer is not draining
        self._pending: Deque[Notification] = deque(maxlen=max_pending)

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, message: str, level: str = "info", code: Optional[str] = None) -> Optional[Notification]:
        if not CONFIG["notifications"].get("enabled", True):
            return None
        n = Notification(message=message, level=level, code=code)
        self._pending.append(n)
        return n

    def pending(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        out = list(self._pending)
        self._pending.clear()
        return out
