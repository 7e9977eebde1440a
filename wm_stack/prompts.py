"""Interactive prompt collector.

Asks the operator for every choice of a run and returns a validated
``ProjectConfig``.  Prompts are asked in a fixed order; the server-action
prompt is only offered once the database feature has been selected.
Interrupting any prompt (Ctrl-C / EOF) raises :class:`PromptCancelled`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import questionary

from wm_stack.config import (
    ActionFlags,
    ComponentFlags,
    FeatureFlags,
    HookFlags,
    PackageManager,
    ProjectConfig,
    ReactVersion,
)
from wm_stack.utils import humanize, to_camel_case

DEFAULT_PROJECT_NAME = "my-nextjs-app"
CURRENT_DIR_ANSWERS = ("", ".", "./")


class PromptCancelled(Exception):
    """Raised when the operator interrupts a prompt."""


# ---------------------------------------------------------------------------
# Name resolution
# ---------------------------------------------------------------------------


def is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())


def resolve_project_name(
    answer: str,
    cwd: Path,
    from_argument: bool = False,
) -> tuple[str, bool]:
    """Turn a name answer (or positional argument) into ``(name, init_in_current_dir)``.

    Current-directory mode is chosen when the answer is empty, ``.`` or
    ``./``, or when the current directory is empty and a prompted answer
    equals its name.  A positional argument only selects it with ``.`` or
    ``./``.  In that mode the project is named after the current directory.
    """
    name = answer.strip()
    if name in CURRENT_DIR_ANSWERS and (name or not from_argument):
        return cwd.name, True
    if not from_argument and name == cwd.name and is_empty_dir(cwd):
        return cwd.name, True
    return name, False


def _validate_name(required: bool):
    def validate(text: str) -> bool | str:
        value = text.strip()
        if value in (".", "./"):
            return True
        if not value:
            return "Project name is required" if required else True
        if "/" in value or "\\" in value:
            return "Project name must be a single directory name"
        return True

    return validate


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class PromptCollector:
    """Collects one ``ProjectConfig`` through interactive prompts.

    Args:
        target_dir: Positional directory argument, if one was given.  The
            name prompt is skipped when it is set.
        cwd: Directory the generator was invoked from.
    """

    def __init__(self, target_dir: str | None = None, cwd: str | Path | None = None) -> None:
        self.target_dir = target_dir
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def collect(self) -> ProjectConfig:
        """Ask every prompt and build the configuration record.

        Raises:
            PromptCancelled: If the operator interrupts any prompt.
        """
        name, in_current_dir = self._ask_name()

        package_manager = PackageManager(
            self._ask(
                questionary.select(
                    "Which package manager do you want to use?",
                    choices=[questionary.Choice(pm.value, value=pm.value) for pm in PackageManager],
                    default=PackageManager.PNPM.value,
                )
            )
        )
        react_version = ReactVersion(
            self._ask(
                questionary.select(
                    "Which React version do you want to use?",
                    choices=[
                        questionary.Choice("React 18 (stable)", value=ReactVersion.REACT_18.value),
                        questionary.Choice("React 19", value=ReactVersion.REACT_19.value),
                    ],
                    default=ReactVersion.REACT_18.value,
                )
            )
        )

        features = self._ask_group("Which features do you want to include?", FeatureFlags)
        components = self._ask_group("Which components do you want to include?", ComponentFlags)
        hooks = self._ask_group("Which hooks do you want to include?", HookFlags, label=to_camel_case)

        actions = ActionFlags()
        if features.database:
            actions = self._ask_group("Which server actions do you want to include?", ActionFlags)

        return ProjectConfig(
            project_name=name,
            init_in_current_dir=in_current_dir,
            package_manager=package_manager,
            react_version=react_version,
            features=features,
            components=components,
            hooks=hooks,
            actions=actions,
        )

    # -- Individual prompts ------------------------------------------------

    def _ask_name(self) -> tuple[str, bool]:
        if self.target_dir is not None:
            return resolve_project_name(self.target_dir, self.cwd, from_argument=True)

        if is_empty_dir(self.cwd):
            answer = self._ask(
                questionary.text(
                    'What is your project named? ("." for the current directory)',
                    default=self.cwd.name,
                    validate=_validate_name(required=False),
                )
            )
        else:
            answer = self._ask(
                questionary.text(
                    "What is your project named?",
                    default=DEFAULT_PROJECT_NAME,
                    validate=_validate_name(required=True),
                )
            )
        return resolve_project_name(answer, self.cwd)

    def _ask_group(self, message: str, model: type, label=humanize):
        """Multi-select over the flags of *model*, pre-checked with their defaults."""
        choices = []
        for name, info in model.model_fields.items():
            title = label(name)
            if info.description:
                title = f"{title} ({info.description})"
            choices.append(questionary.Choice(title, value=name, checked=bool(info.default)))
        picked = self._ask(questionary.checkbox(message, choices=choices))
        return model.from_selection(picked)

    @staticmethod
    def _ask(question: Any) -> Any:
        # Ctrl-C raises KeyboardInterrupt, Ctrl-D on an empty buffer EOFError.
        try:
            return question.unsafe_ask()
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled("Project creation cancelled") from exc


# ---------------------------------------------------------------------------
# Non-interactive
# ---------------------------------------------------------------------------


def default_config(target_dir: str | None, cwd: str | Path) -> ProjectConfig:
    """Configuration used by ``--yes``: every flag at its default.

    The name comes from *target_dir*, or from the current directory when none
    is given (current-directory mode).
    """
    base = Path(cwd)
    if target_dir is None:
        name, in_current_dir = base.name, True
    else:
        name, in_current_dir = resolve_project_name(target_dir, base, from_argument=True)
    return ProjectConfig(project_name=name, init_in_current_dir=in_current_dir)
