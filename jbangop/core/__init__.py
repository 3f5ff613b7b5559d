from .errors import EXIT_FAILURE, EXIT_SUCCESS, ExitStatusError, JBangError, ValidationError
from .platform import PlatformProvider, StaticPlatform, SystemPlatform, is_linux, is_macos, is_windows
from .project import BaseProject
from .operation import JBangOperation

__all__ = [
  "EXIT_FAILURE",
  "EXIT_SUCCESS",
  "ExitStatusError",
  "JBangError",
  "ValidationError",
  "PlatformProvider",
  "StaticPlatform",
  "SystemPlatform",
  "is_linux",
  "is_macos",
  "is_windows",
  "BaseProject",
  "JBangOperation",
]
