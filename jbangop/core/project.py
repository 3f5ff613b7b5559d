from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class BaseProject:
    """
    Hosting project an operation binds to. Only `work_directory` is read.
    """

    work_directory: Path = field(default_factory=Path.cwd)
    name: str = ""
