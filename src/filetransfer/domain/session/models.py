"""Directory-entry descriptor returned by session listings."""

import stat
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class DirEntry:
    """A remote directory entry.

    Attributes:
        filename: Entry name without directory
        path: Full remote path of the entry
        attributes: Library-supplied file attributes (e.g. paramiko.SFTPAttributes)
            exposing ``st_mode``, ``st_size``, ``st_mtime``
    """
    filename: str
    path: str
    attributes: Any

    @property
    def is_dir(self) -> bool:
        mode = getattr(self.attributes, "st_mode", None)
        return mode is not None and stat.S_ISDIR(mode)

    @property
    def size(self) -> Optional[int]:
        return getattr(self.attributes, "st_size", None)
