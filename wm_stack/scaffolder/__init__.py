"""create-wm-stack scaffolder -- materializes the Next.js project tree.

Quick usage::

    from wm_stack.config import ProjectConfig
    from wm_stack.scaffolder import ProjectGenerator, resolve_destination

    config = ProjectConfig(project_name="my-app")
    root = resolve_destination(config, Path.cwd())
    written = await ProjectGenerator(config).generate(root)
"""

from wm_stack.scaffolder.generator import (
    DestinationError,
    ProjectGenerator,
    build_context,
    resolve_destination,
)
from wm_stack.scaffolder.manifest import Manifest, resolve_manifest
from wm_stack.scaffolder.templates import TemplateRenderer

__all__ = [
    "DestinationError",
    "Manifest",
    "ProjectGenerator",
    "TemplateRenderer",
    "build_context",
    "resolve_destination",
    "resolve_manifest",
]
