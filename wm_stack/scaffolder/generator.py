"""Destination validation and project materialization.

Takes a validated ``ProjectConfig`` and writes the project tree: the always
manifest plus every enabled flag's manifest (see :mod:`.manifest`).  The
target root is an explicit ``Path`` computed once by
:func:`resolve_destination`; the process working directory is never changed.
"""

from __future__ import annotations

import asyncio
import stat
from pathlib import Path
from typing import Any

from wm_stack.config import ProjectConfig

from .manifest import MARKER_FILES, FileSpec, Manifest, action_dir, resolve_manifest
from .package_json import build_package_json, exec_prefix, run_prefix
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DestinationError(Exception):
    """Raised when the target location would collide with existing files."""

    def __init__(self, message: str, conflicts: list[str] | None = None) -> None:
        self.conflicts = conflicts or []
        super().__init__(message)


# ---------------------------------------------------------------------------
# Destination
# ---------------------------------------------------------------------------


def resolve_destination(config: ProjectConfig, cwd: str | Path) -> Path:
    """Validate the destination for *config* and return the target root.

    Args:
        config: The run's configuration record.
        cwd: Directory the operator invoked the generator from.

    Returns:
        ``cwd`` itself in current-directory mode, otherwise
        ``cwd / project_name``.

    Raises:
        DestinationError: If the current directory contains a marker file, or
            the named target directory already exists.  Nothing has been
            written when this is raised.
    """
    base = Path(cwd)
    if config.init_in_current_dir:
        conflicts = [name for name in MARKER_FILES if (base / name).exists()]
        if conflicts:
            raise DestinationError(
                f"Current directory contains conflicting files: {', '.join(conflicts)}",
                conflicts,
            )
        return base

    root = base / config.project_name
    if root.exists():
        raise DestinationError(f"Directory {config.project_name} already exists", [str(root)])
    return root


# ---------------------------------------------------------------------------
# Template context
# ---------------------------------------------------------------------------

# (label, tailwind classes, icon) per optional feature, in display order.
_FEATURE_BADGES: dict[str, tuple[str, str, str]] = {
    "database": ("Prisma", "bg-indigo-600 text-white", "🗄️"),
    "better_auth": ("Better Auth", "bg-green-600 text-white", "🔐"),
    "docker": ("Docker", "bg-blue-500 text-white", "🐳"),
    "nodemailer": ("Nodemailer", "bg-orange-600 text-white", "📧"),
    "husky": ("Husky", "bg-gray-700 text-white", "🐕"),
    "linting": ("ESLint + Prettier", "bg-yellow-600 text-white", "✨"),
}

_CORE_BADGES: list[tuple[str, str, str]] = [
    ("Next.js 15", "bg-black text-white", "⚡"),
    ("TypeScript", "bg-blue-600 text-white", "📘"),
    ("Tailwind CSS", "bg-cyan-500 text-white", "🎨"),
    ("Shadcn UI", "bg-slate-800 text-white", "🧩"),
]


def build_context(config: ProjectConfig) -> dict[str, Any]:
    """Build the Jinja2 template context from the configuration record."""
    badges = list(_CORE_BADGES)
    badges.extend(
        _FEATURE_BADGES[name] for name in _FEATURE_BADGES if getattr(config.features, name)
    )
    return {
        "project_name": config.project_name,
        "package_manager": config.pm,
        "run": run_prefix(config.package_manager),
        "exec": exec_prefix(config.package_manager),
        "react_version": config.react_version.value,
        "features": config.features.model_dump(),
        "components": config.components.model_dump(),
        "hooks": config.hooks.selected(),
        "actions": [
            {"name": name, "dir": action_dir(name)} for name in config.actions.selected()
        ],
        "package_json": build_package_json(config),
        "badges": [{"name": n, "color": c, "icon": i} for n, c, i in badges],
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Directory/file materializer.

    Given a ``ProjectConfig``, creates the manifest's directories and renders
    every scaffold-stage file into the target root.  Post-install files (git
    hooks) are left to :class:`wm_stack.installer.tooling.GitHooksSetup`.
    """

    def __init__(self, config: ProjectConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.manifest: Manifest = resolve_manifest(config)

    # -- Public API --------------------------------------------------------

    async def generate(self, root: str | Path) -> list[Path]:
        """Materialize the project into *root*.

        Args:
            root: Target root returned by :func:`resolve_destination`.  It is
                created if missing.

        Returns:
            Paths of every file written, sorted.
        """
        root = Path(root)
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)

        context = build_context(self.config)

        # 1. Create the skeleton directory structure
        await self._create_directory_structure(root)

        # 2. Render every scaffold-stage file
        return await self.render_files(root, self.manifest.scaffold_files(), context)

    async def render_files(
        self,
        root: Path,
        specs: list[FileSpec],
        context: dict[str, Any] | None = None,
    ) -> list[Path]:
        """Render *specs* under *root* and return the written paths."""
        if context is None:
            context = build_context(self.config)
        written: list[Path] = []
        for spec in specs:
            out = root / spec.path
            await self.renderer.render_to_file(spec.template, out, context)
            written.append(out)
        return sorted(written)

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create every directory the manifest names, including empty ones."""

        async def _mkdir(d: str) -> None:
            await asyncio.to_thread((root / d).mkdir, parents=True, exist_ok=True)

        await asyncio.gather(*[_mkdir(d) for d in sorted(self.manifest.directories)])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
