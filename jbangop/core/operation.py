from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import EXIT_FAILURE, ExitStatusError, raise_on_failure
from .logging import OPERATION_LOGGER, get_logger
from .platform import PlatformProvider, is_windows
from .project import BaseProject
from ..trace.trace_emitter import TraceEmitter

PathArg = Union[str, bytes, os.PathLike]
ArgValue = Union[PathArg, Iterable[PathArg]]

JBANG_HOME_ENV = "JBANG_HOME"


def _to_path(value: PathArg) -> Path:
    # str, Path and raw handles (bytes, os.DirEntry, other PathLike) all land here.
    return Path(os.fsdecode(value))


def _flatten(values: Iterable[ArgValue]) -> List[str]:
    out: List[str] = []
    for v in values:
        if isinstance(v, (str, bytes, os.PathLike)):
            out.append(os.fsdecode(v))
        else:
            out.extend(os.fsdecode(x) for x in v)
    return out


class JBangOperation:
    """
    Runs JBang with the configured arguments.

    Typical use (each setter returns the operation)::

        JBangOperation().from_project(project).jbang_args("--quiet").script("hello.java").execute()

    The command is run through the platform shell (`sh -c` or `cmd.exe /c`) with
    inherited standard streams, in the configured working directory.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        platform: Optional[PlatformProvider] = None,
    ):
        self._logger = logger or get_logger(OPERATION_LOGGER)
        self._platform = platform
        self._args: List[str] = []
        self._jbang_args: List[str] = []
        self._script: Optional[str] = None
        self._jbang_home: Optional[Path] = None
        self._work_dir: Optional[Path] = None
        self._exit_on_failure = True
        self._silent = False
        self._project: Optional[BaseProject] = None
        self._trace: Optional[TraceEmitter] = None

    def args(self, *args: ArgValue) -> JBangOperation:
        """
        Append arguments passed to the script. Accepts strings or iterables of strings.
        """
        self._args.extend(_flatten(args))
        return self

    def jbang_args(self, *args: ArgValue) -> JBangOperation:
        """
        Append arguments passed to JBang itself (before the script).
        """
        self._jbang_args.extend(_flatten(args))
        return self

    def script(self, script: Optional[str]) -> JBangOperation:
        self._script = script
        return self

    def jbang_home(self, jbang_home: PathArg) -> JBangOperation:
        self._jbang_home = _to_path(jbang_home)
        return self

    def work_dir(self, work_dir: PathArg) -> JBangOperation:
        """
        Working directory for the process, if it differs from the project's directory.
        """
        self._work_dir = _to_path(work_dir)
        return self

    def exit_on_failure(self, exit_on_failure: bool) -> JBangOperation:
        """
        Whether a non-zero JBang exit status raises ExitStatusError. Default: True.
        """
        self._exit_on_failure = bool(exit_on_failure)
        return self

    def silent(self, silent: bool) -> JBangOperation:
        self._silent = bool(silent)
        return self

    def trace(self, emitter: Optional[TraceEmitter]) -> JBangOperation:
        self._trace = emitter
        return self

    def from_project(self, project: BaseProject) -> JBangOperation:
        """
        Configure the operation from a project.

        Sets:
        - work_dir to the project's directory
        - jbang_home to the JBANG_HOME environment variable, if present (even empty)
        """
        self._project = project
        self._work_dir = Path(project.work_directory).absolute()

        jbang_home_env = os.environ.get(JBANG_HOME_ENV)
        if jbang_home_env is not None:
            self.jbang_home(jbang_home_env)
        return self

    def reset(self) -> None:
        """
        Clear script, script args and JBang args, and restore exit_on_failure to True.
        JBang home, working directory and project are kept.
        """
        self._args.clear()
        self._jbang_args.clear()
        self._exit_on_failure = True
        self._script = None

    def get_args(self) -> List[str]:
        return self._args

    def get_jbang_args(self) -> List[str]:
        return self._jbang_args

    def get_script(self) -> Optional[str]:
        return self._script

    def get_jbang_home(self) -> Optional[Path]:
        return self._jbang_home

    def get_work_dir(self) -> Optional[Path]:
        return self._work_dir

    def get_project(self) -> Optional[BaseProject]:
        return self._project

    def is_exit_on_failure(self) -> bool:
        return self._exit_on_failure

    def is_silent(self) -> bool:
        return self._silent

    def _shell_command(self) -> List[str]:
        if is_windows(self._platform):
            return ["cmd.exe", "/c"]
        return ["sh", "-c"]

    def find_jbang_exec(self) -> str:
        exe = "jbang.cmd" if is_windows(self._platform) else "jbang"
        if self._jbang_home is not None:
            return str(self._jbang_home.absolute() / "bin" / exe)
        return exe

    def command_line(self) -> str:
        parts = [self.find_jbang_exec(), *self._jbang_args]
        if self._script is not None:
            parts.append(self._script)
        parts.extend(self._args)
        return " ".join(parts)

    def build_command(self) -> List[str]:
        return [*self._shell_command(), self.command_line()]

    def _log(self, level: int, msg: str) -> None:
        if not self._silent and self._logger.isEnabledFor(level):
            self._logger.log(level, msg)

    def _emit(self, event_type: str, **kwargs) -> None:
        # Trace output never replaces the operation outcome.
        if self._trace is None:
            return
        try:
            self._trace.emit(event_type, **kwargs)
        except OSError as e:
            self._log(logging.WARNING, f"Trace write failed ({event_type}): {e}")

    def _fail(self, code: str, message: str) -> ExitStatusError:
        err = ExitStatusError(code=code, message=message, data={"status": EXIT_FAILURE}, status=EXIT_FAILURE)
        self._log(logging.ERROR, message)
        self._emit("error", message=message, data={"code": code, "status": EXIT_FAILURE})
        return err

    def execute(self) -> None:
        """
        Run JBang and wait for it to finish.

        Raises ExitStatusError when no project is bound, the working directory is
        not a directory, the process cannot be started or waited on, or (with
        exit_on_failure) the process exits non-zero.
        """
        if self._project is None:
            raise self._fail("project.missing", "A project must be specified.")
        if self._work_dir is None or not self._work_dir.is_dir():
            shown = self._work_dir.absolute() if self._work_dir is not None else None
            raise self._fail("work_dir.invalid", f"Invalid working directory: {shown}")

        command = self.build_command()
        self._log(logging.INFO, command[-1])
        self._emit("command_built", data={"command": command, "work_dir": str(self._work_dir)})

        try:
            proc = subprocess.run(command, cwd=str(self._work_dir), check=False)
        except (OSError, subprocess.SubprocessError, KeyboardInterrupt) as e:
            raise self._fail("process.error", str(e) or type(e).__name__) from e

        self._emit("process_finished", data={"exit_code": proc.returncode})
        if self._exit_on_failure:
            raise_on_failure(proc.returncode, message=f"JBang exited with status {proc.returncode}")
