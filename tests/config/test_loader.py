from __future__ import annotations

import json

from result import Err, Ok

from reclaim.config.defaults import default_config
from reclaim.config.loader import load_config, sample_config_json
from tests.fs_mock import MemoryFileSystem


def test_load_config_missing_uses_defaults() -> None:
    fs = MemoryFileSystem()
    result = load_config(path="/missing.json", fs=fs)
    assert isinstance(result, Ok)
    assert result.unwrap() == default_config()


def test_load_config_reads_values() -> None:
    payload = {"workers": 6, "includeRoot": True, "humanReadable": True, "showIssues": False, "topCount": 5}
    fs = MemoryFileSystem().add_file("/config.json", content=json.dumps(payload))
    cfg = load_config(path="/config.json", fs=fs).unwrap()
    assert cfg.workers == 6
    assert cfg.include_root is True
    assert cfg.human_readable is True
    assert cfg.show_issues is False
    assert cfg.top_count == 5


def test_load_config_clamps_values() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content='{"workers": 0, "topCount": -3}')
    cfg = load_config(path="/config.json", fs=fs).unwrap()
    assert cfg.workers == 1
    assert cfg.top_count == 0


def test_load_config_partial_keeps_defaults() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content='{"humanReadable": true}')
    cfg = load_config(path="/config.json", fs=fs).unwrap()
    assert cfg.human_readable is True
    assert cfg.workers == default_config().workers


def test_load_config_invalid_returns_warning() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content="not-json")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    warning = result.unwrap_err()
    assert "failed reading config" in warning.lower()


def test_load_config_non_object_rejected() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content="[1, 2]")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    assert "must be a JSON object" in result.unwrap_err()


def test_sample_config_round_trips_defaults() -> None:
    data = json.loads(sample_config_json())
    assert data == default_config().to_dict()
