# tests/test_config.py
from pathlib import Path

import pytest

from inventory.config import Settings, DEFAULT_DATA_FILE


def test_defaults(monkeypatch):
    for name in ("INVENTORY_DATA_FILE", "INVENTORY_STORAGE_POLICY", "INVENTORY_PORT",
                 "INVENTORY_CORS_ORIGINS", "INVENTORY_MASK_READ_FAILURES", "INVENTORY_FALLBACK_DIR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.data_file == DEFAULT_DATA_FILE
    assert s.storage_policy == "fixed"
    assert s.port == 3001
    assert s.cors_origins == ["*"]
    assert s.mask_read_failures is True
    assert s.fallback_dir is None

def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("INVENTORY_DATA_FILE", str(tmp_path / "store.json"))
    monkeypatch.setenv("INVENTORY_STORAGE_POLICY", "Fallback")
    monkeypatch.setenv("INVENTORY_FALLBACK_DIR", str(tmp_path / "tmp"))
    monkeypatch.setenv("INVENTORY_ATOMIC_WRITES", "yes")
    monkeypatch.setenv("INVENTORY_MASK_READ_FAILURES", "false")
    monkeypatch.setenv("INVENTORY_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("INVENTORY_PORT", "8085")
    monkeypatch.setenv("INVENTORY_LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.data_file == tmp_path / "store.json"
    assert s.storage_policy == "fallback"
    assert s.fallback_dir == Path(tmp_path / "tmp")
    assert s.atomic_writes is True
    assert s.mask_read_failures is False
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.port == 8085
    assert s.log_level == "DEBUG"

def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        Settings(storage_policy="s3")
