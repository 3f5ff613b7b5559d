from __future__ import annotations

from pathlib import Path

from . import contracts


def schemas_dir() -> Path:
    """
    JSON Schemas shipped inside the `jbangop.contracts` package.
    """
    return Path(contracts.__file__).resolve().parent / "schemas"
