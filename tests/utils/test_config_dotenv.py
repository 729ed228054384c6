import importlib
import sys
import builtins
import types
import logging
import os
from pathlib import Path

import pytest


def _reload_config():
    sys.modules.pop("livecrawl.config", None)
    return importlib.import_module("livecrawl.config")


def test_missing_dotenv_logs_warning(monkeypatch, caplog):
    orig_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):
        if name == "dotenv" or name.startswith("dotenv."):
            raise ImportError
        return orig_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    caplog.set_level(logging.WARNING)
    cfg = _reload_config()
    assert "python-dotenv not available" in caplog.text

    monkeypatch.setenv("USER_AGENT", "X-Agent")
    assert cfg.get_str_env("USER_AGENT", "LiveCrawl/0.1") == "X-Agent"


def test_dotenv_present_but_fails_to_load(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=FromFile")
    monkeypatch.chdir(tmp_path)

    fake = types.SimpleNamespace(load_dotenv=lambda: False)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    with pytest.raises(RuntimeError):
        _reload_config()
    sys.modules.pop("livecrawl.config", None)


def test_dotenv_loads_sets_variables(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=DotenvAgent")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("USER_AGENT", raising=False)

    def fake_load():
        p = Path(".env")
        for line in p.read_text().splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                monkeypatch.setenv(k, v)
        return True

    fake = types.SimpleNamespace(load_dotenv=fake_load)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    cfg = _reload_config()
    assert cfg.get_str_env("USER_AGENT", "LiveCrawl/0.1") == "DotenvAgent"


def test_typed_helpers_fall_back_on_invalid_values(monkeypatch):
    cfg = _reload_config()
    monkeypatch.setenv("LIVECRAWL_TEST_INT", "abc")
    monkeypatch.setenv("LIVECRAWL_TEST_FLOAT", "fast")
    monkeypatch.setenv("LIVECRAWL_TEST_BOOL", "maybe")
    assert cfg.get_int_env("LIVECRAWL_TEST_INT", 4) == 4
    assert cfg.get_float_env("LIVECRAWL_TEST_FLOAT", 0.5) == 0.5
    assert cfg.get_bool_env("LIVECRAWL_TEST_BOOL", True) is True


def test_typed_helpers_parse_values(monkeypatch):
    cfg = _reload_config()
    monkeypatch.setenv("LIVECRAWL_TEST_INT", "12")
    monkeypatch.setenv("LIVECRAWL_TEST_FLOAT", "0.25")
    monkeypatch.setenv("LIVECRAWL_TEST_BOOL", "off")
    monkeypatch.delenv("LIVECRAWL_TEST_OPT", raising=False)
    assert cfg.get_int_env("LIVECRAWL_TEST_INT", 4) == 12
    assert cfg.get_float_env("LIVECRAWL_TEST_FLOAT", 0.5) == 0.25
    assert cfg.get_bool_env("LIVECRAWL_TEST_BOOL", True) is False
    assert cfg.get_optional_str_env("LIVECRAWL_TEST_OPT") is None
