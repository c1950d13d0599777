from __future__ import annotations

from reclaim.config.schema import AppConfig


def default_config() -> AppConfig:
    return AppConfig()
