import logging

from neuron_main.utils.config import CONFIG
from neuron_main.utils.debug import debug_log, get_logger


def test_debug_log_is_silent_by_default(caplog):
    with caplog.at_level(logging.DEBUG):
        debug_log("quiet message")
    assert "quiet message" not in caplog.text


def test_debug_mode_can_be_switched_on_at_runtime(monkeypatch, caplog):
    get_logger("test")
    monkeypatch.setitem(CONFIG, "debug_mode", True)
    with caplog.at_level(logging.DEBUG):
        debug_log("loud message")
    assert "loud message" in caplog.text
    assert caplog.records[-1].levelno == logging.DEBUG
    assert caplog.records[-1].name == "neuron.debug"


def test_switching_debug_off_restores_info_level(monkeypatch):
    monkeypatch.setitem(CONFIG, "debug_mode", True)
    debug_log("on")
    assert logging.getLogger("neuron").level == logging.DEBUG
    monkeypatch.setitem(CONFIG, "debug_mode", False)
    debug_log("off")
    assert logging.getLogger("neuron").level == logging.INFO
