"""Shared pytest fixtures for the create-wm-stack test suite.

Provides reusable fixtures for:
- Configuration records (defaults, everything off, everything on)
- A recording fake process runner with configurable failures
- Working directories for current-directory and named-directory runs
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from wm_stack.config import (
    ActionFlags,
    ComponentFlags,
    FeatureFlags,
    HookFlags,
    ProjectConfig,
)
from wm_stack.utils import format_command


# ---------------------------------------------------------------------------
# Configuration helpers
# ---------------------------------------------------------------------------

def make_config(
    name: str = "my-app",
    features: list[str] | None = None,
    components: list[str] | None = None,
    hooks: list[str] | None = None,
    actions: list[str] | None = None,
    **kwargs,
) -> ProjectConfig:
    """Build a record where exactly the named flags are enabled."""
    return ProjectConfig(
        project_name=name,
        features=FeatureFlags.from_selection(features),
        components=ComponentFlags.from_selection(components),
        hooks=HookFlags.from_selection(hooks),
        actions=ActionFlags.from_selection(actions),
        **kwargs,
    )


def all_flags(model: type) -> list[str]:
    return list(model.model_fields)


@pytest.fixture
def default_config() -> ProjectConfig:
    """Record with every flag at its default."""
    return ProjectConfig(project_name="my-app")


@pytest.fixture
def minimal_config() -> ProjectConfig:
    """Record with every optional flag disabled."""
    return make_config()


@pytest.fixture
def full_config() -> ProjectConfig:
    """Record with every optional flag enabled."""
    return make_config(
        features=all_flags(FeatureFlags),
        components=all_flags(ComponentFlags),
        hooks=all_flags(HookFlags),
        actions=all_flags(ActionFlags),
    )


# ---------------------------------------------------------------------------
# Process runner fake
# ---------------------------------------------------------------------------

@dataclass
class RecordedCall:
    cmd: list[str] | str
    cwd: Path | None
    capture: bool

    @property
    def text(self) -> str:
        return format_command(self.cmd)


class FakeRunner:
    """Records every command instead of running it.

    Args:
        failures: Command strings (``"pnpm install"``) that exit with 1.
        missing: Executables that raise ``FileNotFoundError``.
    """

    def __init__(self, failures: set[str] | None = None, missing: set[str] | None = None) -> None:
        self.failures = failures or set()
        self.missing = missing or set()
        self.calls: list[RecordedCall] = []

    async def __call__(self, cmd, cwd=None, timeout=None, capture=True, env=None):
        call = RecordedCall(cmd=cmd, cwd=Path(cwd) if cwd else None, capture=capture)
        self.calls.append(call)
        executable = cmd[0] if isinstance(cmd, list) else cmd.split()[0]
        if executable in self.missing:
            raise FileNotFoundError(f"[Errno 2] No such file or directory: '{executable}'")
        if call.text in self.failures:
            return 1, "", "ERR! simulated failure"
        return 0, "", ""

    @property
    def commands(self) -> list[str]:
        return [call.text for call in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# ---------------------------------------------------------------------------
# Working directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Non-empty directory the generator is invoked from."""
    cwd = tmp_path / "workspace"
    cwd.mkdir()
    (cwd / "notes.txt").write_text("keep me\n", encoding="utf-8")
    return cwd


@pytest.fixture
def empty_workdir(tmp_path: Path) -> Path:
    """Empty directory the generator is invoked from."""
    cwd = tmp_path / "fresh-app"
    cwd.mkdir()
    return cwd


# ---------------------------------------------------------------------------
# Console capture
# ---------------------------------------------------------------------------

_CONSOLE_MODULES = (
    "wm_stack.utils",
    "wm_stack.reporter",
    "wm_stack.pipeline",
    "wm_stack.installer.dependencies",
    "wm_stack.installer.tooling",
)


@pytest.fixture
def recorded_console(monkeypatch) -> Console:
    """Swap the shared Rich console for a wide recording one.

    Read the output with ``recorded_console.export_text()``.
    """
    recorder = Console(record=True, width=200, force_terminal=False, color_system=None)
    for module in _CONSOLE_MODULES:
        monkeypatch.setattr(f"{module}.console", recorder)
    return recorder
