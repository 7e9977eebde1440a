"""create-wm-stack pipeline orchestrator.

A run is strictly linear:

1. CONFIGURE -- collect the configuration record (prompts, ``--config`` or ``--yes``).
2. VALIDATE  -- check the destination; nothing is written if it conflicts.
3. SCAFFOLD  -- create the directory skeleton and render the manifest.
4. INSTALL   -- ``<pm> install`` in the target root.
5. TOOLING   -- git hooks and shadcn/ui components.
6. REPORT    -- summary, next steps and collected warnings.

Steps 4 and 5 never abort the run; their failures are warnings.

Usage::

    create-wm-stack my-app
    create-wm-stack --yes
    python -m wm_stack.pipeline my-app --config stack.json --skip-install
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from wm_stack import __version__
from wm_stack.config import ProjectConfig
from wm_stack.installer import DependencyInstaller, GitHooksSetup, ShadcnInstaller, StepResult
from wm_stack.installer.runner import ProcessRunner
from wm_stack.prompts import PromptCancelled, PromptCollector, default_config, resolve_project_name
from wm_stack.reporter import Reporter
from wm_stack.scaffolder import DestinationError, ProjectGenerator, TemplateRenderer, resolve_destination
from wm_stack.utils import (
    console,
    print_error,
    print_step_header,
    print_success,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs every stage after configuration for one ``ProjectConfig``.

    Args:
        config: The validated configuration record.
        cwd: Directory the generator was invoked from.
        runner: Process runner used for every external command.
        skip_install: Skip the dependency install and shadcn/ui steps,
            reporting each as a warning.
        renderer: Template renderer override (tests).
    """

    def __init__(
        self,
        config: ProjectConfig,
        cwd: str | Path,
        runner: ProcessRunner = run_command,
        skip_install: bool = False,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.cwd = Path(cwd)
        self.runner = runner
        self.skip_install = skip_install
        self.generator = ProjectGenerator(config, renderer=renderer)

    async def run(self) -> list[StepResult]:
        """Execute the pipeline and return the install/tooling step results.

        Raises:
            DestinationError: If the destination conflicts.  Raised before
                anything is written.
        """
        root = resolve_destination(self.config, self.cwd)

        print_step_header("Scaffolding project")
        written = await self.generator.generate(root)
        print_success(f"Created {len(written)} files in {root}")

        results: list[StepResult] = []

        print_step_header("Installing dependencies")
        if self.skip_install:
            results.append(
                self._skipped(
                    "Dependency install",
                    f"Please run {self.config.pm} install manually",
                )
            )
        else:
            results.append(await DependencyInstaller(self.config, self.runner).install(root))

        print_step_header("Post-install tooling")
        results.extend(await GitHooksSetup(self.config, self.generator).setup(root))

        shadcn = ShadcnInstaller(self.config, self.runner)
        if shadcn.enabled:
            if self.skip_install:
                results.append(
                    self._skipped(
                        "shadcn/ui",
                        "Run npx shadcn@latest init, then add: " + " ".join(shadcn.components()),
                    )
                )
            else:
                results.extend(await shadcn.install(root))

        Reporter(self.config).report(results)
        return results

    @staticmethod
    def _skipped(name: str, hint: str) -> StepResult:
        message = f"{name} skipped (--skip-install). {hint}"
        print_warning(f"  {message}")
        return StepResult.warning(name, message)


# ---------------------------------------------------------------------------
# Configuration sources
# ---------------------------------------------------------------------------


def build_config(args: argparse.Namespace, cwd: str | Path) -> ProjectConfig:
    """Build the configuration record from the parsed CLI arguments.

    Raises:
        PromptCancelled: If the operator interrupts a prompt.
        OSError: If ``--config`` cannot be read.
        pydantic.ValidationError: If the record is invalid.
    """
    cwd = Path(cwd)
    if args.config:
        config = ProjectConfig.load(Path(args.config))
        if args.directory is None:
            return config
        name, in_current_dir = resolve_project_name(args.directory, cwd, from_argument=True)
        data = config.model_dump()
        data.update(project_name=name, init_in_current_dir=in_current_dir)
        return ProjectConfig.model_validate(data)

    if args.yes:
        return default_config(args.directory, cwd)

    return PromptCollector(args.directory, cwd).collect()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-wm-stack",
        description="Generate a Next.js application skeleton with your choice of stack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-wm-stack my-app\n"
            "  create-wm-stack . --yes\n"
            "  create-wm-stack my-app --config stack.json --skip-install\n"
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help='Target directory name ("." for the current directory)',
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the prompts and use the default selections",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Load a saved configuration record (JSON) instead of prompting",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not run the dependency install or the shadcn/ui steps",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-wm-stack`` and ``python -m wm_stack.pipeline``."""
    args = build_parser().parse_args(argv)
    cwd = Path.cwd()

    console.print("[bold cyan]create-wm-stack[/bold cyan] [dim]Next.js project generator[/dim]")
    console.print()

    try:
        config = build_config(args, cwd)
    except PromptCancelled:
        print_error("Project creation cancelled")
        sys.exit(1)
    except (ValidationError, OSError, ValueError) as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    pipeline = Pipeline(config, cwd, runner=run_command, skip_install=args.skip_install)
    try:
        asyncio.run(pipeline.run())
    except DestinationError as exc:
        print_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
