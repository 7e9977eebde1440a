"""End-of-run summary and next-step instructions.

Output only: the reporter never changes the exit status of a run.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from wm_stack.config import ProjectConfig
from wm_stack.installer.runner import StepResult
from wm_stack.utils import console, humanize, print_step_header, print_summary_table


class Reporter:
    """Prints the success headline, the selections and what to do next."""

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config

    # -- Content -----------------------------------------------------------

    def summary(self) -> dict[str, str]:
        config = self.config
        selected = config.selected()
        data = {
            "Project": config.project_name,
            "Location": "current directory" if config.init_in_current_dir else f"./{config.project_name}",
            "Package manager": config.pm,
            "React": config.react_version.value,
        }
        for group, names in selected.items():
            data[humanize(group)] = ", ".join(names) if names else "none"
        return data

    def next_steps(self) -> list[str]:
        steps: list[str] = []
        if not self.config.init_in_current_dir:
            steps.append(f"cd {self.config.project_name}")
        steps.append("cp .env.example .env.local")
        script = "setup" if self.config.features.database else "dev"
        steps.append(f"{self.config.pm} run {script}")
        return steps

    def reminders(self) -> list[str]:
        features = self.config.features
        reminders: list[str] = []
        if features.database:
            reminders.append("Set DATABASE_URL in .env.local before running setup")
        if features.better_auth:
            reminders.append("Generate BETTER_AUTH_SECRET and add your Google OAuth credentials")
        if features.nodemailer:
            reminders.append("Fill in the SMTP_* variables to enable outgoing email")
        if features.docker:
            reminders.append("Run docker compose up --build to start the containerised stack")
        if features.husky and not features.linting:
            reminders.append("The pre-commit hook runs lint-staged; add a lint-staged config to package.json")
        return reminders

    # -- Output ------------------------------------------------------------

    def report(self, results: list[StepResult] | None = None) -> None:
        """Print the full report, including any *results* that ended in a warning."""
        warnings = [r for r in (results or []) if not r.ok]

        print_step_header("Done", style="green")
        console.print(
            Panel.fit(
                f"[bold green]Project {self.config.project_name} created successfully![/bold green]",
                border_style="green",
            )
        )
        print_summary_table(self.summary(), title="Your stack")

        console.print("[bold]Next steps:[/bold]")
        for step in self.next_steps():
            console.print(f"  [cyan]{escape(step)}[/cyan]")

        reminders = self.reminders()
        if reminders:
            console.print()
            console.print("[bold]Remember to:[/bold]")
            for reminder in reminders:
                console.print(f"  - {escape(reminder)}")

        if warnings:
            console.print()
            console.print(f"[bold yellow]Completed with {len(warnings)} warning(s):[/bold yellow]")
            for result in warnings:
                console.print(f"  [yellow]- {escape(result.message)}[/yellow]")
        console.print()
