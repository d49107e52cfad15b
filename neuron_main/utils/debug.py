# Logging helpers. debug_log() is gated by CONFIG["debug_mode"], read on
# every call so the flag can be flipped while the app is running.

from __future__ import annotations
import logging

from neuron_main.utils.config import CONFIG

_ROOT = "neuron"
_configured = False


def _level() -> int:
    return logging.DEBUG if CONFIG.get("debug_mode") else logging.INFO


def _configure() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(_level())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Child logger under the 'neuron' root, e.g. get_logger(__name__)."""
    _configure()
    if name.startswith("neuron_main."):
        name = name[len("neuron_main."):]
    return logging.getLogger(f"{_ROOT}.{name}")


def debug_log(msg: str) -> None:
    root = logging.getLogger(_ROOT)
    level = _level()
    if root.level != level:
        root.setLevel(level)
    if level != logging.DEBUG:
        return
    get_logger("debug").debug(msg)
