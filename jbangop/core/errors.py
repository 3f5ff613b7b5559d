from __future__ import annotations

from dataclasses import dataclass
from typing import Any

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass(frozen=True)
class JBangError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass(frozen=True)
class ExitStatusError(JBangError):
    """
    Raised by an operation to signal a process-style exit status.

    `status` is the child's real exit code when the process ran, and
    EXIT_FAILURE when it never ran or could not be waited on.
    """

    status: int = EXIT_FAILURE


class ValidationError(JBangError):
    pass


def raise_on_failure(status: int, *, code: str = "process.failed", message: str | None = None) -> None:
    if status == EXIT_SUCCESS:
        return
    raise ExitStatusError(
        code=code,
        message=message or f"Process exited with status {status}",
        data={"status": status},
        status=status,
    )
