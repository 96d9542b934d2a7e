"""Environment parsing."""
import importlib

import pytest

from sre_app import config


@pytest.mark.parametrize("raw, expected", [
    ("25", 25),
    ("0", 0),
    ("-5", -5),
    ("150", 150),
    ("+5", 5),
])
def test_env_int_parses(monkeypatch, raw, expected):
    monkeypatch.setenv("CHAOS_KNOB", raw)
    assert config.env_int("CHAOS_KNOB") == expected


@pytest.mark.parametrize("raw", ["", "abc", "12.5", "50%", " 7 ", "7\n", "1_000"])
def test_env_int_malformed_defaults_to_zero(monkeypatch, raw):
    monkeypatch.setenv("CHAOS_KNOB", raw)
    assert config.env_int("CHAOS_KNOB") == 0


def test_env_int_missing(monkeypatch):
    monkeypatch.delenv("CHAOS_KNOB", raising=False)
    assert config.env_int("CHAOS_KNOB") == 0
    assert config.env_int("CHAOS_KNOB", 8080) == 8080


def test_module_reads_chaos_knobs(monkeypatch):
    monkeypatch.setenv("ERROR_RATE", "not-a-number")
    monkeypatch.setenv("LATENCY_MS", "250")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.ERROR_RATE == 0
        assert reloaded.LATENCY_MS == 250
    finally:
        monkeypatch.undo()
        importlib.reload(config)
