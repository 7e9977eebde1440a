"""Dependency installation for the generated project."""

from __future__ import annotations

from pathlib import Path

from wm_stack.config import ProjectConfig
from wm_stack.utils import console, run_command

from .runner import ProcessRunner, StepResult, run_step


class DependencyInstaller:
    """Runs ``<pm> install`` in the target root with inherited stdio.

    The operator sees the package manager's own progress output.  Failure is
    reported as a warning with a manual recovery hint; the run continues.
    """

    def __init__(self, config: ProjectConfig, runner: ProcessRunner = run_command) -> None:
        self.config = config
        self.runner = runner

    @property
    def command(self) -> list[str]:
        return [self.config.pm, "install"]

    async def install(self, root: Path) -> StepResult:
        console.print(f"[yellow]Installing dependencies with {self.config.pm}...[/yellow]")
        return await run_step(
            "Dependency install",
            self.command,
            cwd=root,
            runner=self.runner,
            capture=False,
            hint=f"Please run {self.config.pm} install manually",
        )
