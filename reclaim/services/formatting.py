from __future__ import annotations

UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def format_size(size: int, *, human: bool = False) -> str:
    """Raw byte count by default, ``format_bytes`` when *human* is set."""
    return format_bytes(size) if human else str(size)


def trim_path(path: str, root_prefix: str) -> str:
    return path[len(root_prefix) :] if path.startswith(root_prefix) else path
