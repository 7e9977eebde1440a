"""Step results and the injectable process runner.

Every subprocess step of a run returns a :class:`StepResult` instead of
raising: a failed install or tooling command is a *warning* that is printed
immediately, collected, and listed again by the reporter.  The process
runner is a plain async callable so tests can substitute a recording fake.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from wm_stack.utils import format_command, print_success, print_warning, run_command


class StepStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"


class StepResult(BaseModel):
    """Outcome of one install or tooling step."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: StepStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.OK

    @classmethod
    def success(cls, name: str, message: str = "") -> "StepResult":
        return cls(name=name, status=StepStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str) -> "StepResult":
        return cls(name=name, status=StepStatus.WARNING, message=message)


class ProcessRunner(Protocol):
    """Signature shared by :func:`wm_stack.utils.run_command` and test fakes."""

    async def __call__(
        self,
        cmd: str | list[str],
        cwd: str | Path | None = None,
        timeout: int | None = None,
        capture: bool = True,
        env: dict[str, str] | None = None,
    ) -> tuple[int, str, str]: ...


async def run_step(
    name: str,
    cmd: list[str],
    cwd: Path,
    runner: ProcessRunner = run_command,
    capture: bool = True,
    hint: str = "",
) -> StepResult:
    """Run *cmd* in *cwd* and turn the outcome into a :class:`StepResult`.

    A non-zero exit code or a missing executable yields a warning carrying
    *hint*; nothing is raised.  The result is printed as it is produced.
    """
    try:
        returncode, _stdout, stderr = await runner(cmd, cwd=cwd, capture=capture)
    except OSError as exc:
        returncode, stderr = -1, str(exc)

    if returncode == 0:
        result = StepResult.success(name, f"{format_command(cmd)} completed")
        print_success(f"  {name}: done")
        return result

    detail = stderr.strip().splitlines()[-1] if stderr.strip() else f"exit code {returncode}"
    message = f"{name} failed ({detail})"
    if hint:
        message = f"{message}. {hint}"
    print_warning(f"  {message}")
    return StepResult.warning(name, message)
