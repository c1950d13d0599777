from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class AppConfig:
    workers: int = 1
    include_root: bool = False
    human_readable: bool = False
    show_issues: bool = True
    top_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "workers": self.workers,
            "includeRoot": self.include_root,
            "humanReadable": self.human_readable,
            "showIssues": self.show_issues,
            "topCount": self.top_count,
        }


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    return AppConfig(
        workers=max(1, int(data.get("workers", defaults.workers))),
        include_root=bool(data.get("includeRoot", defaults.include_root)),
        human_readable=bool(data.get("humanReadable", defaults.human_readable)),
        show_issues=bool(data.get("showIssues", defaults.show_issues)),
        top_count=max(0, int(data.get("topCount", defaults.top_count))),
    )
