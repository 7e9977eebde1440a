"""Configuration record for a single generator run.

Every run is driven by exactly one ``ProjectConfig``.  It is built from the
operator's prompt answers (or a saved JSON file, or defaults), validated once,
and then passed read-only through the materializer, the installers and the
reporter.  All models are frozen Pydantic v2 models.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PackageManager(str, Enum):
    """Supported JavaScript package managers."""

    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"


class ReactVersion(str, Enum):
    """Supported React major versions."""

    REACT_18 = "18"
    REACT_19 = "19"


# ---------------------------------------------------------------------------
# Flag groups
# ---------------------------------------------------------------------------


class _FlagGroup(BaseModel):
    """Base for a group of named boolean flags."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def selected(self) -> list[str]:
        """Return the names of enabled flags, in declaration order."""
        return [name for name, value in self if value]

    def any(self) -> bool:
        return any(value for _, value in self)

    @classmethod
    def from_selection(cls, names: list[str] | None) -> "_FlagGroup":
        """Build a group where exactly the flags in *names* are enabled.

        Unknown names are rejected so a typo in a saved config never passes
        silently.
        """
        names = names or []
        unknown = set(names) - set(cls.model_fields)
        if unknown:
            raise ValueError(f"Unknown {cls.__name__} flags: {', '.join(sorted(unknown))}")
        return cls(**{name: name in names for name in cls.model_fields})


class FeatureFlags(_FlagGroup):
    """Optional infrastructure features."""

    database: bool = Field(default=True, description="Prisma + PostgreSQL")
    better_auth: bool = Field(default=True, description="Better Auth authentication")
    docker: bool = Field(default=True, description="Dockerfile and docker-compose")
    husky: bool = Field(default=True, description="Git hooks via Husky + lint-staged")
    linting: bool = Field(default=True, description="ESLint + Prettier")
    nodemailer: bool = Field(default=False, description="Outbound email via Nodemailer")


class ComponentFlags(_FlagGroup):
    """Optional reusable UI components."""

    data_table: bool = Field(default=True, description="Data table with filtering/sorting")
    custom_inputs: bool = Field(default=True, description="Text/select/password/textarea inputs")
    file_upload: bool = False
    date_time_input: bool = False
    date_range_input: bool = False
    number_input: bool = False
    price_input: bool = False
    phone_input: bool = False
    radio_group_input: bool = False


class HookFlags(_FlagGroup):
    """Standalone utility hooks emitted under ``hooks/``."""

    use_click_away: bool = False
    use_continuous_retry: bool = False
    use_copy_to_clipboard: bool = False
    use_debounce: bool = False
    use_event_listener: bool = False
    use_geolocation: bool = False
    use_hover: bool = False
    use_intersection_observer: bool = False
    use_is_client: bool = False
    use_is_first_render: bool = False
    use_key_press: bool = False
    use_local_storage: bool = False
    use_long_press: bool = False
    use_media_query: bool = False
    use_mouse: bool = False
    use_orientation: bool = False
    use_page_leave: bool = False
    use_session_storage: bool = False
    use_throttle: bool = False
    use_timeout: bool = False
    use_toggle: bool = False
    use_window_scroll: bool = False
    use_window_size: bool = False


class ActionFlags(_FlagGroup):
    """Server-action CRUD modules backed by Prisma."""

    contact_submission: bool = False
    newsletter_subscription: bool = False


# ---------------------------------------------------------------------------
# Configuration record
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Everything a single generator run needs to know.

    Instances are immutable; build a new one with ``model_copy(update=...)``
    if a variant is needed (tests do this heavily).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = Field(..., min_length=1, description="npm package / directory name")
    init_in_current_dir: bool = Field(
        default=False, description="Write into the current directory instead of a new one"
    )
    package_manager: PackageManager = Field(default=PackageManager.PNPM)
    react_version: ReactVersion = Field(default=ReactVersion.REACT_18)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    components: ComponentFlags = Field(default_factory=ComponentFlags)
    hooks: HookFlags = Field(default_factory=HookFlags)
    actions: ActionFlags = Field(default_factory=ActionFlags)

    @model_validator(mode="after")
    def _actions_need_database(self) -> "ProjectConfig":
        if self.actions.any() and not self.features.database:
            raise ValueError(
                "Server actions ("
                + ", ".join(self.actions.selected())
                + ") require the database feature"
            )
        return self

    # ------------------------------------------------------------------
    # Convenience views
    # ------------------------------------------------------------------

    @property
    def pm(self) -> str:
        """The package manager as a plain string (``"pnpm"``, ...)."""
        return self.package_manager.value

    def selected(self) -> dict[str, list[str]]:
        """Return ``{group: [enabled flag names]}`` for every flag group."""
        return {
            "features": self.features.selected(),
            "components": self.components.selected(),
            "hooks": self.hooks.selected(),
            "actions": self.actions.selected(),
        }

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the record to a JSON file and return the path written."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load and validate a record previously written by :meth:`save`.

        Raises:
            OSError: If the file cannot be read.
            pydantic.ValidationError: If the content is not a valid record.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
