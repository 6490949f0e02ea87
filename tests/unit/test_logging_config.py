from pathlib import Path

import pytest
import yaml

from policybook.utils import logging_config
from policybook.utils.logging_config import (
    LogFiles,
    Logger,
    clear_trace_id,
    get_trace_id,
    set_trace_id,
)


@pytest.fixture
def fresh_log_files(monkeypatch):
    monkeypatch.setattr(LogFiles, "_loaded", False)
    monkeypatch.setattr(LogFiles, "_files", {})
    yield LogFiles


def test_logger_writes_formatted_line(isolated_logs):
    Logger.info("hello policy", file="policy/policy.log")

    lines = (isolated_logs / "policy" / "policy.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert "[INFO] [-] test_logging_config.py:" in lines[0]
    assert lines[0].endswith(" - hello policy")


def test_logger_default_file(isolated_logs):
    Logger.warning("general")
    assert (isolated_logs / "policybook.log").exists()


def test_logger_respects_level(isolated_logs, monkeypatch):
    monkeypatch.setenv("POLICYBOOK_LOG_LEVEL", "error")
    Logger.reset()

    Logger.info("dropped", file="levels.log")
    Logger.error("kept", file="levels.log")

    text = (isolated_logs / "levels.log").read_text(encoding="utf-8")
    assert "dropped" not in text
    assert "kept" in text


def test_set_level_at_runtime(isolated_logs):
    Logger.set_level("debug")
    Logger.debug("now visible", file="levels.log")
    assert "now visible" in (isolated_logs / "levels.log").read_text(encoding="utf-8")


def test_init_arguments_override_environment(tmp_path: Path):
    target = tmp_path / "explicit"
    Logger.init(base_dir=str(target), level="WARNING")

    Logger.info("skip", file="x.log")
    Logger.warning("write", file="x.log")

    assert (target / "x.log").read_text(encoding="utf-8").count("\n") == 1


def test_trace_id_is_included(isolated_logs):
    tid = set_trace_id("req-abc")
    try:
        assert get_trace_id() == "req-abc"
        Logger.info("traced", file="trace.log")
    finally:
        clear_trace_id()

    assert tid == "req-abc"
    assert get_trace_id() is None
    assert "[req-abc]" in (isolated_logs / "trace.log").read_text(encoding="utf-8")


def test_set_trace_id_generates_when_missing():
    try:
        tid = set_trace_id()
        assert tid.startswith("req-")
        assert len(tid) == len("req-") + 12
    finally:
        clear_trace_id()


def test_log_files_defaults(fresh_log_files):
    assert fresh_log_files.POLICY == "policy/policy.log"
    assert fresh_log_files.ERROR == "errors/error.log"
    assert fresh_log_files.get("unknown") == "unknown/unknown.log"
    with pytest.raises(AttributeError):
        fresh_log_files.MISSING


def test_log_files_loaded_from_yaml(fresh_log_files, tmp_path: Path, monkeypatch):
    cfg = tmp_path / "log_config.yaml"
    cfg.write_text(yaml.safe_dump({"files": {"audit": "audit/audit.log"}}), encoding="utf-8")
    monkeypatch.setattr(logging_config, "LOG_CONFIG_FILE", cfg)

    assert fresh_log_files.AUDIT == "audit/audit.log"
    assert fresh_log_files.POLICY == "policy/policy.log"


def test_broken_yaml_falls_back_to_defaults(fresh_log_files, tmp_path: Path, monkeypatch):
    cfg = tmp_path / "log_config.yaml"
    cfg.write_text("files: [unclosed", encoding="utf-8")
    monkeypatch.setattr(logging_config, "LOG_CONFIG_FILE", cfg)

    assert fresh_log_files.get("policy") == "policy/policy.log"


def test_file_rotates_at_max_bytes(isolated_logs, monkeypatch):
    monkeypatch.setenv("POLICYBOOK_LOG_MAX_BYTES", "200")
    monkeypatch.setenv("POLICYBOOK_LOG_BACKUP_COUNT", "2")
    Logger.reset()

    for i in range(10):
        Logger.info(f"line {i} " + "x" * 40, file="rot.log")

    assert (isolated_logs / "rot.log").exists()
    assert (isolated_logs / "rot.log.1").exists()
