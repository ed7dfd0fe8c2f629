import logging
import subprocess
import sys
from pathlib import Path

from pomyu.config import AppConfig


def test_defaults(monkeypatch, tmp_path):
    for name in ("POMYU_TICK_MS", "POMYU_LOG_LEVEL", "POMYU_SOUND"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("POMYU_DATA_DIR", str(tmp_path))
    cfg = AppConfig.from_env()
    assert cfg.data_dir == tmp_path
    assert cfg.db_path == tmp_path / "pomyu.sqlite"
    assert cfg.tick_interval_ms == 1000
    assert cfg.log_level == logging.INFO
    assert cfg.sound_enabled is True


def test_overrides_and_bad_values(monkeypatch, tmp_path):
    monkeypatch.setenv("POMYU_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.setenv("POMYU_TICK_MS", "250")
    monkeypatch.setenv("POMYU_LOG_LEVEL", "debug")
    monkeypatch.setenv("POMYU_SOUND", "off")
    cfg = AppConfig.from_env()
    assert cfg.data_dir == Path(tmp_path / "d")
    assert cfg.tick_interval_ms == 250
    assert cfg.log_level == logging.DEBUG
    assert cfg.sound_enabled is False

    monkeypatch.setenv("POMYU_TICK_MS", "fast")
    monkeypatch.setenv("POMYU_LOG_LEVEL", "chatty")
    cfg = AppConfig.from_env()
    assert cfg.tick_interval_ms == 1000
    assert cfg.log_level == logging.INFO

    monkeypatch.setenv("POMYU_TICK_MS", "0")
    assert AppConfig.from_env().tick_interval_ms == 1


def test_config_imports_without_qt():
    src = Path(__file__).resolve().parents[1] / "src"
    code = "import sys, pomyu.config; sys.exit('PyQt6' in sys.modules)"
    result = subprocess.run([sys.executable, "-c", code], cwd=src, capture_output=True, text=True)
    assert result.returncode == 0, result.stderr
