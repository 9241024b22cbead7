from datetime import datetime
from pathlib import Path
from typing import Optional

_SIZE_UNITS = ["bytes", "KB", "MB", "GB", "TB"]


def display_size(size: int) -> str:
    """Human readable size rounded down to whole units, e.g. '1 KB' for 1536 bytes"""
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size //= 1024
        unit += 1
    return f"{size} {_SIZE_UNITS[unit]}"


def display_modified(modified: datetime) -> str:
    # shown in the local zone of the machine running the browser
    return modified.astimezone().strftime("%d/%m/%Y %H:%M")


def parent_folder(path: Path) -> Optional[Path]:
    """Parent of *path*, or None at the filesystem root"""
    path = Path(path)
    parent = path.parent
    if parent == path:
        return None
    return parent
