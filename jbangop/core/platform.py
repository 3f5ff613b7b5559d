from __future__ import annotations

import platform
from typing import Optional, Protocol

_SYSTEM_NAMES = {"Darwin": "Mac OS X"}


class PlatformProvider(Protocol):
    def os_name(self) -> Optional[str]:
        ...


class SystemPlatform:
    """
    Reports the running interpreter's operating system name.

    "Darwin" is reported as "Mac OS X": it also contains "win", which would
    make macOS match the Windows predicate.
    """

    def os_name(self) -> Optional[str]:
        name = platform.system()
        if not name:
            return None
        return _SYSTEM_NAMES.get(name, name)


class StaticPlatform:
    """
    Fixed OS name, for simulating other platforms without touching process state.
    """

    def __init__(self, name: Optional[str]):
        self._name = name

    def os_name(self) -> Optional[str]:
        return self._name


_SYSTEM = SystemPlatform()


def _folded_os_name(provider: Optional[PlatformProvider]) -> Optional[str]:
    name = (provider or _SYSTEM).os_name()
    if name is None:
        return None
    return name.casefold()


def is_linux(provider: Optional[PlatformProvider] = None) -> bool:
    # Unix-like names count as Linux.
    name = _folded_os_name(provider)
    return name is not None and ("linux" in name or "unix" in name)


def is_macos(provider: Optional[PlatformProvider] = None) -> bool:
    name = _folded_os_name(provider)
    return name is not None and ("mac" in name or "darwin" in name or "osx" in name)


def is_windows(provider: Optional[PlatformProvider] = None) -> bool:
    name = _folded_os_name(provider)
    return name is not None and "win" in name
