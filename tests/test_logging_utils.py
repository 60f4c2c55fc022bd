import json
import logging

from cavegen import create_app
from cavegen.logging_utils import get_logger
from cavegen.server import _configure_logging


def test_get_logger_is_cached():
    assert get_logger("cavegen.test") is get_logger("cavegen.test")
    assert get_logger("cavegen.test") is not get_logger("cavegen.other")


def test_key_value_line_on_stderr(monkeypatch, capsys):
    monkeypatch.delenv("CAVEGEN_LOG_JSON", raising=False)
    monkeypatch.setenv("CAVEGEN_LOG_LEVEL", "info")
    get_logger("cavegen.test").info(event="hello world", count=3, skipped=None)
    captured = capsys.readouterr()
    assert captured.out == ""
    line = captured.err.strip()
    assert line.startswith("level=info ts=")
    assert "event=hello_world" in line
    assert "count=3" in line
    assert "logger=cavegen.test" in line
    assert "skipped" not in line


def test_level_threshold(monkeypatch, capsys):
    log = get_logger("cavegen.test")
    monkeypatch.setenv("CAVEGEN_LOG_LEVEL", "info")
    log.debug(event="hidden")
    assert capsys.readouterr().err == ""
    monkeypatch.setenv("CAVEGEN_LOG_LEVEL", "debug")
    log.debug(event="shown")
    assert "event=shown" in capsys.readouterr().err
    monkeypatch.setenv("CAVEGEN_LOG_LEVEL", "error")
    log.warn(event="quiet")
    assert capsys.readouterr().err == ""


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("CAVEGEN_LOG_JSON", "1")
    monkeypatch.setenv("CAVEGEN_LOG_LEVEL", "info")
    get_logger("cavegen.test").warn(event="no_floor_positions", width=5)
    rec = json.loads(capsys.readouterr().err.strip())
    assert rec["level"] == "warn"
    assert rec["event"] == "no_floor_positions"
    assert rec["width"] == 5
    assert rec["logger"] == "cavegen.test"


def test_configure_logging_writes_to_instance_dir(tmp_path, monkeypatch):
    app = create_app({"TESTING": True})
    monkeypatch.setattr(app, "instance_path", str(tmp_path / "instance"))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        # twice to exercise the handler replacement path
        _configure_logging(app)
        log_path = _configure_logging(app)
        assert len(root.handlers) == 2
        logging.getLogger("cavegen.test").info("server ready")
        for h in root.handlers:
            h.flush()
        assert (tmp_path / "instance" / "app.log").exists()
        assert log_path == str(tmp_path / "instance" / "app.log")
        assert "server ready" in (tmp_path / "instance" / "app.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            if h not in saved_handlers:
                h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
