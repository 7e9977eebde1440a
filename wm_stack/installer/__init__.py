"""create-wm-stack installer module.

Runs the external commands that follow materialization.  Every step returns
``StepResult`` values; failures are warnings, never exceptions.

Key classes:
    DependencyInstaller - ``<pm> install`` in the target root
    GitHooksSetup       - Husky pre-commit hook
    ShadcnInstaller     - shadcn/ui init and component adds
"""

from .dependencies import DependencyInstaller
from .runner import ProcessRunner, StepResult, StepStatus, run_step
from .tooling import (
    SHADCN_CORE,
    SHADCN_REQUIREMENTS,
    GitHooksSetup,
    ShadcnInstaller,
    resolve_shadcn_components,
)

__all__ = [
    "DependencyInstaller",
    "GitHooksSetup",
    "ProcessRunner",
    "SHADCN_CORE",
    "SHADCN_REQUIREMENTS",
    "ShadcnInstaller",
    "StepResult",
    "StepStatus",
    "resolve_shadcn_components",
    "run_step",
]
