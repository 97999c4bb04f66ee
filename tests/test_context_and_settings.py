from __future__ import annotations

from pathlib import Path

import pytest

import servertiming
import servertiming.context as ctx
from servertiming import ConfigurationError, TimingRegistry
from servertiming.config import Settings
from servertiming.locator import PathListLocator
from servertiming.sinks import LoggingHeaderSink


def test_use_registry_binds_module_functions():
    reg = TimingRegistry()
    with servertiming.use_registry(reg) as bound:
        assert bound is reg
        assert servertiming.current_registry() is reg
        servertiming.profile("a")
        servertiming.profile("a")
        servertiming.start("b")
        assert servertiming.stop("b") >= 0.0
    assert reg.totals("a").calls == 1
    assert reg.totals("b").calls == 1
    assert len(reg.header_sink.values()) == 1


def test_current_registry_falls_back_to_default(monkeypatch):
    default = TimingRegistry(locator=PathListLocator(()))
    monkeypatch.setattr(ctx, "_DEFAULT", default)
    assert servertiming.current_registry() is default
    other = TimingRegistry()
    with servertiming.use_registry(other):
        assert servertiming.current_registry() is other
    assert servertiming.current_registry() is default


def test_module_log_and_set_log_file(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(ctx, "_DEFAULT", TimingRegistry(locator=PathListLocator(())))
    log_file = tmp_path / "t.log"
    log_file.touch()
    servertiming.set_log_file(str(log_file))
    servertiming.log("job", debug=False)
    servertiming.log("job")
    assert log_file.read_text().startswith("Server-Timing: job - (")
    with pytest.raises(ConfigurationError):
        servertiming.set_log_file(str(tmp_path / "missing.log"))


def test_registry_from_settings(tmp_path: Path):
    log_file = tmp_path / "s.log"
    log_file.touch()
    settings = Settings(
        log_file=str(log_file),
        log_candidates=[str(tmp_path / "unused.log")],
        debug=False,
        header_precision=1,
    )
    reg = TimingRegistry.from_settings(settings)
    assert reg.log_file == str(log_file)
    assert reg.debug is False
    assert reg.header_precision == 1
    assert reg.locator.candidates == [str(tmp_path / "unused.log")]
    assert reg.observers == []


def test_registry_from_settings_rejects_bad_log_file(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        TimingRegistry.from_settings(Settings(log_file=str(tmp_path / "missing.log")))


def test_default_registry_does_not_retain_headers(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(ctx, "_DEFAULT", None)
    monkeypatch.delenv("SERVERTIMING_LOG_FILE", raising=False)
    monkeypatch.setenv("SERVERTIMING_LOG_CANDIDATES", str(tmp_path / "none.log"))
    reg = ctx.default_registry()
    assert isinstance(reg.header_sink, LoggingHeaderSink)
    for _ in range(100):
        servertiming.profile("job")
        servertiming.profile("job")
    assert reg.totals("job").calls == 100
    assert ctx.default_registry() is reg
