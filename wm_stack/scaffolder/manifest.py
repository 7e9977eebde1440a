"""Flag-to-file mapping for generated projects.

This module is the compatibility surface of the generator: for every flag it
states exactly which directories and files that flag contributes.  A project
is the union of the *always* manifest and the manifests of its enabled flags,
nothing more.  Each manifest is independent of every other one; two flags may
contribute the same path (``components/shared/Spinner.tsx``), in which case
the file is written once.

Paths are POSIX-style and relative to the target root.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wm_stack.config import (
    ActionFlags,
    ComponentFlags,
    FeatureFlags,
    HookFlags,
    ProjectConfig,
)
from wm_stack.utils import to_camel_case, to_kebab_case


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileSpec:
    """One generated file.

    Attributes:
        path: Output path relative to the target root.
        template: Template path relative to the template directory.  Defaults
            to ``path + ".j2"``.
        post_install: Written by post-install tooling rather than by the
            materializer (git hooks).
        executable: Should receive the executable bit where supported.
    """

    path: str
    template: str = ""
    post_install: bool = False
    executable: bool = False

    def __post_init__(self) -> None:
        if not self.template:
            object.__setattr__(self, "template", f"{self.path}.j2")


@dataclass(frozen=True)
class FlagManifest:
    """Directories and files contributed by a single flag (or the base set)."""

    directories: tuple[str, ...] = ()
    files: tuple[FileSpec, ...] = ()

    @property
    def paths(self) -> frozenset[str]:
        return frozenset(f.path for f in self.files)


@dataclass
class Manifest:
    """Resolved manifest for one configuration record."""

    directories: set[str] = field(default_factory=set)
    files: dict[str, FileSpec] = field(default_factory=dict)

    def add(self, part: FlagManifest) -> None:
        self.directories.update(part.directories)
        for spec in part.files:
            self.files.setdefault(spec.path, spec)

    @property
    def paths(self) -> frozenset[str]:
        """Every file path in the manifest, regardless of stage."""
        return frozenset(self.files)

    def scaffold_files(self) -> list[FileSpec]:
        """Files the materializer writes, in a stable order."""
        return [self.files[p] for p in sorted(self.files) if not self.files[p].post_install]

    def post_install_files(self) -> list[FileSpec]:
        """Files written by post-install tooling, in a stable order."""
        return [self.files[p] for p in sorted(self.files) if self.files[p].post_install]


# ---------------------------------------------------------------------------
# Always-present content
# ---------------------------------------------------------------------------

MARKER_FILES: tuple[str, ...] = ("package.json", "next.config.js", "tsconfig.json")

ALWAYS = FlagManifest(
    directories=(
        "actions",
        "app",
        "components/ui",
        "constants",
        "contexts",
        "hooks",
        "lib",
        "lib/security",
        "providers",
        "public/images",
        "public/icons",
        "schemas",
        "stores",
        "types",
        "utils",
    ),
    files=(
        FileSpec("package.json"),
        FileSpec("next.config.js"),
        FileSpec("tsconfig.json"),
        FileSpec("tailwind.config.js"),
        FileSpec("postcss.config.js"),
        FileSpec(".env.example", "env.example.j2"),
        FileSpec(".gitignore", "gitignore.j2"),
        FileSpec("README.md"),
        FileSpec("app/layout.tsx"),
        FileSpec("app/page.tsx"),
        FileSpec("app/error.tsx"),
        FileSpec("app/loading.tsx"),
        FileSpec("app/not-found.tsx"),
        FileSpec("app/robots.txt"),
        FileSpec("app/sitemap.ts"),
        FileSpec("app/globals.css"),
        FileSpec("lib/utils.ts"),
        FileSpec("lib/create-safe-action.ts"),
        FileSpec("hooks/use-actions.ts"),
        FileSpec("hooks/use-custom-navigate.ts"),
        FileSpec("stores/formStore.ts"),
        FileSpec("stores/resetStores.ts"),
        FileSpec("constants/nav.constants.ts"),
        FileSpec("constants/index.ts"),
        FileSpec("types/users.types.ts"),
        FileSpec("types/index.ts"),
        FileSpec("schemas/users.schemas.ts"),
        FileSpec("schemas/index.ts"),
    ),
)


# ---------------------------------------------------------------------------
# Feature flags
# ---------------------------------------------------------------------------

FEATURE_MANIFESTS: dict[str, FlagManifest] = {
    "database": FlagManifest(
        directories=("prisma",),
        files=(
            FileSpec("prisma/schema.prisma"),
            FileSpec("prisma/seed.ts"),
            FileSpec("lib/db.ts"),
        ),
    ),
    "better_auth": FlagManifest(
        files=(
            FileSpec("lib/auth.ts"),
            FileSpec("lib/auth-client.ts"),
            FileSpec("app/api/auth/[...all]/route.ts", "app/api/auth/route.ts.j2"),
        ),
    ),
    "docker": FlagManifest(
        files=(
            FileSpec("Dockerfile"),
            FileSpec("docker-compose.yml"),
            FileSpec(".dockerignore", "dockerignore.j2"),
        ),
    ),
    "husky": FlagManifest(
        files=(
            FileSpec(
                ".husky/pre-commit",
                "husky/pre-commit.j2",
                post_install=True,
                executable=True,
            ),
        ),
    ),
    "linting": FlagManifest(
        files=(
            FileSpec(".prettierrc", "prettierrc.j2"),
            FileSpec(".prettierignore", "prettierignore.j2"),
            FileSpec(".eslintrc.json", "eslintrc.json.j2"),
        ),
    ),
    "nodemailer": FlagManifest(files=(FileSpec("lib/email.ts"),)),
}


# ---------------------------------------------------------------------------
# Component flags
# ---------------------------------------------------------------------------

_INPUTS_DIR = "components/shared/inputs"
_SPINNER = FileSpec("components/shared/Spinner.tsx")
_DATA_TABLE = "components/shared/data-table"


def _input(filename: str, *extra: FileSpec) -> FlagManifest:
    return FlagManifest(
        directories=(_INPUTS_DIR,),
        files=(FileSpec(f"{_INPUTS_DIR}/{filename}"), *extra),
    )


COMPONENT_MANIFESTS: dict[str, FlagManifest] = {
    "data_table": FlagManifest(
        directories=(
            f"{_DATA_TABLE}/components",
            f"{_DATA_TABLE}/hooks",
            f"{_DATA_TABLE}/utils",
            f"{_DATA_TABLE}/types",
        ),
        files=(
            FileSpec(f"{_DATA_TABLE}/index.tsx"),
            FileSpec(f"{_DATA_TABLE}/DataTable.tsx"),
            FileSpec(f"{_DATA_TABLE}/types/index.ts"),
            FileSpec(f"{_DATA_TABLE}/utils/sorting.ts"),
            FileSpec(f"{_DATA_TABLE}/utils/filtering.ts"),
            FileSpec(f"{_DATA_TABLE}/utils/pagination.ts"),
            FileSpec(f"{_DATA_TABLE}/components/TableEmptyState.tsx"),
            FileSpec(f"{_DATA_TABLE}/components/TableErrorState.tsx"),
            FileSpec(f"{_DATA_TABLE}/components/TableLoadingState.tsx"),
            FileSpec(f"{_DATA_TABLE}/components/TablePagination.tsx"),
            FileSpec(f"{_DATA_TABLE}/components/TableFilters.tsx"),
            FileSpec(f"{_DATA_TABLE}/hooks/useTableState.ts"),
            _SPINNER,
        ),
    ),
    "custom_inputs": FlagManifest(
        directories=(_INPUTS_DIR,),
        files=(
            FileSpec(f"{_INPUTS_DIR}/TextInput.tsx"),
            FileSpec(f"{_INPUTS_DIR}/CheckboxInput.tsx"),
            FileSpec(f"{_INPUTS_DIR}/SelectInput.tsx"),
            FileSpec(f"{_INPUTS_DIR}/PasswordInput.tsx"),
            FileSpec(f"{_INPUTS_DIR}/TextareaInput.tsx"),
            FileSpec("components/shared/Container.tsx"),
            _SPINNER,
        ),
    ),
    "file_upload": _input("FileUpload.tsx", _SPINNER),
    "date_time_input": _input("DateTimeInput.tsx"),
    "date_range_input": _input("DateRangeInput.tsx"),
    "number_input": _input("NumberInput.tsx"),
    "price_input": _input("PriceInput.tsx"),
    "phone_input": _input("PhoneInput.tsx"),
    "radio_group_input": _input("RadioGroupInput.tsx"),
}


# ---------------------------------------------------------------------------
# Hook flags: one file per hook, named after the flag
# ---------------------------------------------------------------------------

HOOK_MANIFESTS: dict[str, FlagManifest] = {
    name: FlagManifest(files=(FileSpec(f"hooks/{to_kebab_case(name)}.ts"),))
    for name in HookFlags.model_fields
}


# ---------------------------------------------------------------------------
# Server-action flags
# ---------------------------------------------------------------------------

def action_dir(name: str) -> str:
    """Directory name of a server-action module (``contact_submission`` -> ``contactSubmission``)."""
    return to_camel_case(name)


ACTION_MANIFESTS: dict[str, FlagManifest] = {
    name: FlagManifest(
        directories=(f"actions/{action_dir(name)}",),
        files=tuple(
            FileSpec(f"actions/{action_dir(name)}/{part}.ts")
            for part in ("schemas", "types", "index")
        ),
    )
    for name in ActionFlags.model_fields
}


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

GROUP_MANIFESTS: dict[str, dict[str, FlagManifest]] = {
    "features": FEATURE_MANIFESTS,
    "components": COMPONENT_MANIFESTS,
    "hooks": HOOK_MANIFESTS,
    "actions": ACTION_MANIFESTS,
}

FLAG_MODELS = {
    "features": FeatureFlags,
    "components": ComponentFlags,
    "hooks": HookFlags,
    "actions": ActionFlags,
}


def resolve_manifest(config: ProjectConfig) -> Manifest:
    """Return the union of the always manifest and every enabled flag's manifest."""
    manifest = Manifest()
    manifest.add(ALWAYS)
    for group, enabled in config.selected().items():
        for name in enabled:
            manifest.add(GROUP_MANIFESTS[group][name])
    return manifest
