"""Post-install tooling: git hooks and shadcn/ui components.

Both steps run after the dependency install and never raise; each problem
becomes its own warning ``StepResult`` and the run carries on.
"""

from __future__ import annotations

import os
from pathlib import Path

from wm_stack.config import ComponentFlags, ProjectConfig
from wm_stack.scaffolder.generator import ProjectGenerator, make_executable
from wm_stack.utils import console, print_success, print_warning, run_command

from .runner import ProcessRunner, StepResult, run_step


# ---------------------------------------------------------------------------
# shadcn/ui requirements
# ---------------------------------------------------------------------------

SHADCN_CORE: tuple[str, ...] = ("form", "input", "label", "button")

SHADCN_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "custom_inputs": ("select", "textarea", "checkbox"),
    "data_table": ("table", "checkbox", "select"),
    "file_upload": ("tooltip",),
    "date_time_input": ("popover", "calendar"),
    "date_range_input": ("popover", "calendar"),
    "number_input": (),
    "price_input": (),
    "phone_input": ("command", "popover", "scroll-area"),
    "radio_group_input": ("radio-group",),
}

SHADCN_INIT = ["npx", "shadcn@latest", "init", "--yes", "--force"]
SHADCN_MANUAL_HINT = "You can install them manually later with: npx shadcn@latest add <component>"


def resolve_shadcn_components(components: ComponentFlags) -> list[str]:
    """Return the shadcn components to add, deduplicated in first-seen order."""
    ordered: dict[str, None] = dict.fromkeys(SHADCN_CORE)
    for flag in components.selected():
        ordered.update(dict.fromkeys(SHADCN_REQUIREMENTS[flag]))
    return list(ordered)


# ---------------------------------------------------------------------------
# Git hooks
# ---------------------------------------------------------------------------


class GitHooksSetup:
    """Writes the post-install files (``.husky/pre-commit``) of the manifest."""

    def __init__(self, config: ProjectConfig, generator: ProjectGenerator | None = None) -> None:
        self.config = config
        self.generator = generator or ProjectGenerator(config)

    @property
    def enabled(self) -> bool:
        return bool(self.generator.manifest.post_install_files())

    async def setup(self, root: Path) -> list[StepResult]:
        if not self.enabled:
            return []
        specs = self.generator.manifest.post_install_files()

        console.print("[yellow]Setting up git hooks...[/yellow]")
        try:
            await self.generator.render_files(root, specs)
        except OSError as exc:
            message = f"Git hook setup failed ({exc}). You can set up Husky manually later"
            print_warning(f"  {message}")
            return [StepResult.warning("Git hooks", message)]

        results: list[StepResult] = []
        if os.name != "nt":
            for spec in specs:
                if not spec.executable:
                    continue
                try:
                    make_executable(root / spec.path)
                except OSError as exc:
                    message = f"Failed to make {spec.path} executable ({exc})"
                    print_warning(f"  {message}")
                    results.append(StepResult.warning("Git hooks", message))

        if not results:
            print_success("  Git hooks: done")
            results.append(StepResult.success("Git hooks", ", ".join(s.path for s in specs)))
        return results


# ---------------------------------------------------------------------------
# shadcn/ui
# ---------------------------------------------------------------------------


class ShadcnInstaller:
    """Initialises shadcn/ui once, then adds each required component.

    ``npx`` is used regardless of the selected package manager.
    """

    def __init__(self, config: ProjectConfig, runner: ProcessRunner = run_command) -> None:
        self.config = config
        self.runner = runner

    @property
    def enabled(self) -> bool:
        return self.config.components.any()

    def components(self) -> list[str]:
        return resolve_shadcn_components(self.config.components)

    async def install(self, root: Path) -> list[StepResult]:
        if not self.enabled:
            return []

        console.print("[yellow]Installing shadcn/ui components...[/yellow]")
        init = await run_step(
            "shadcn/ui init",
            SHADCN_INIT,
            cwd=root,
            runner=self.runner,
            capture=False,
            hint=SHADCN_MANUAL_HINT,
        )
        if not init.ok:
            return [init]

        results = [init]
        for name in self.components():
            results.append(
                await run_step(
                    f"shadcn/ui {name}",
                    ["npx", "shadcn@latest", "add", name, "--yes"],
                    cwd=root,
                    runner=self.runner,
                    capture=True,
                    hint=f"Run npx shadcn@latest add {name} manually",
                )
            )
        return results
