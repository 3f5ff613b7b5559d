from .core import BaseProject, ExitStatusError, JBangOperation

__all__ = ["BaseProject", "ExitStatusError", "JBangOperation"]

__version__ = "0.1.0"
