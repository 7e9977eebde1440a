"""Tests for the end-of-run reporter.

Covers:
- Summary table content
- Next steps for named-directory and current-directory runs
- Feature reminders
- Warning listing
"""

from __future__ import annotations

import pytest

from wm_stack.config import FeatureFlags, PackageManager
from wm_stack.installer import StepResult
from wm_stack.reporter import Reporter

from conftest import make_config

pytestmark = pytest.mark.unit


class TestSummary:
    def test_summary_lists_selections(self):
        config = make_config(features=["database", "docker"], hooks=["use_toggle"])
        summary = Reporter(config).summary()

        assert summary["Project"] == "my-app"
        assert summary["Location"] == "./my-app"
        assert summary["Package manager"] == "pnpm"
        assert summary["React"] == "18"
        assert summary["Features"] == "database, docker"
        assert summary["Hooks"] == "use_toggle"
        assert summary["Actions"] == "none"

    def test_current_directory_location(self):
        config = make_config("workspace", init_in_current_dir=True)
        assert Reporter(config).summary()["Location"] == "current directory"


class TestNextSteps:
    def test_named_directory_with_database(self, default_config):
        assert Reporter(default_config).next_steps() == [
            "cd my-app",
            "cp .env.example .env.local",
            "pnpm run setup",
        ]

    def test_current_directory_without_database(self):
        config = make_config(
            "workspace", init_in_current_dir=True, package_manager=PackageManager.NPM
        )
        assert Reporter(config).next_steps() == [
            "cp .env.example .env.local",
            "npm run dev",
        ]


class TestReminders:
    def test_no_reminders_for_minimal(self, minimal_config):
        assert Reporter(minimal_config).reminders() == []

    def test_database_and_auth(self, default_config):
        reminders = " ".join(Reporter(default_config).reminders())
        assert "DATABASE_URL" in reminders
        assert "BETTER_AUTH_SECRET" in reminders

    def test_husky_without_linting(self, default_config):
        config = default_config.model_copy(update={"features": FeatureFlags(linting=False)})
        assert any("lint-staged" in r for r in Reporter(config).reminders())


class TestReport:
    def test_success_headline_and_steps(self, recorded_console, default_config):
        Reporter(default_config).report([StepResult.success("Dependency install")])
        output = recorded_console.export_text()

        assert "Project my-app created successfully!" in output
        assert "cd my-app" in output
        assert "pnpm run setup" in output
        assert "warning(s)" not in output

    def test_warnings_listed(self, recorded_console, minimal_config):
        results = [
            StepResult.success("Git hooks"),
            StepResult.warning("Dependency install", "Dependency install failed (exit code 1)"),
            StepResult.warning("shadcn/ui table", "shadcn/ui table failed ([x] missing)"),
        ]
        Reporter(minimal_config).report(results)
        output = recorded_console.export_text()

        assert "Completed with 2 warning(s):" in output
        assert "Dependency install failed (exit code 1)" in output
        assert "shadcn/ui table failed ([x] missing)" in output
