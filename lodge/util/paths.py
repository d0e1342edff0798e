"""Filesystem locations for lodge data."""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_data_dir() -> Path:
    override = os.environ.get("LODGE_DATA_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / "lodge"


@dataclass(frozen=True)
class LodgePaths:
    """Resolved data locations. LODGE_DATA_DIR overrides the XDG default."""

    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def database_file(self) -> Path:
        return self.data_dir / "lodge.db"
