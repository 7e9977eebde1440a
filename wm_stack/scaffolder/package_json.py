"""Builds the generated project's ``package.json`` document.

Scripts, dependencies and devDependencies depend on the selected features,
components and React version.  The result is a plain ``dict`` with a stable
key order; the template layer only serialises it.
"""

from __future__ import annotations

import re
from typing import Any

from wm_stack.config import PackageManager, ProjectConfig, ReactVersion


REACT_PINS: dict[ReactVersion, dict[str, str]] = {
    ReactVersion.REACT_18: {
        "react": "^18.3.1",
        "react-dom": "^18.3.1",
        "@types/react": "^18.3.17",
        "@types/react-dom": "^18.3.5",
    },
    ReactVersion.REACT_19: {
        "react": "^19.0.0",
        "react-dom": "^19.0.0",
        "@types/react": "^19.0.0",
        "@types/react-dom": "^19.0.0",
    },
}


def run_prefix(pm: PackageManager) -> str:
    """Command prefix used to run a package script (``npm run`` / ``pnpm``)."""
    return "npm run" if pm is PackageManager.NPM else pm.value


def exec_prefix(pm: PackageManager) -> str:
    """Command prefix used to execute a locally installed binary."""
    return "npx" if pm is PackageManager.NPM else pm.value


def _setup_script(pm: PackageManager) -> str:
    x = exec_prefix(pm)
    steps = [
        f"{pm.value} install",
        f"{x} prisma db push --force-reset",
        f"{x} prisma generate",
        f"{x} prisma db seed",
        f"{run_prefix(pm)} dev",
    ]
    return " && ".join(steps)


def build_scripts(config: ProjectConfig) -> dict[str, str]:
    features = config.features
    scripts: dict[str, str] = {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    }

    if features.linting:
        scripts["lint"] = "next lint"
        scripts["lint:fix"] = "eslint . --fix"
        scripts["format"] = "prettier --write ."
        scripts["format:check"] = "prettier --check ."
        scripts["type-check"] = "tsc --noEmit"

    if features.database:
        run = run_prefix(config.package_manager)
        scripts["setup"] = _setup_script(config.package_manager)
        scripts["db:push"] = "prisma db push"
        scripts["db:seed"] = "prisma db seed"
        scripts["db:generate"] = "prisma generate"
        scripts["db:studio"] = "prisma studio"
        scripts["dev:studio"] = (
            "concurrently --kill-others-on-fail "
            '--prefix-colors "cyan.bold,magenta.bold" --names "NEXT,PRISMA" '
            f'"{run} dev" "{run} db:studio"'
        )

    if features.husky:
        scripts["prepare"] = "husky"

    return scripts


def build_dependencies(config: ProjectConfig) -> dict[str, str]:
    features = config.features
    components = config.components
    pins = REACT_PINS[config.react_version]

    dependencies: dict[str, str] = {
        "next": "latest",
        "react": pins["react"],
        "react-dom": pins["react-dom"],
        "typescript": "latest",
        "@types/node": "latest",
        "@types/react": pins["@types/react"],
        "@types/react-dom": pins["@types/react-dom"],
        "tailwindcss": "latest",
        "@tailwindcss/postcss": "latest",
        "autoprefixer": "latest",
        "postcss": "latest",
        "class-variance-authority": "latest",
        "clsx": "latest",
        "tailwind-merge": "latest",
        "tailwindcss-animate": "latest",
        "lucide-react": "latest",
        "zustand": "latest",
        "react-hook-form": "latest",
        "@hookform/resolvers": "latest",
        "zod": "latest",
        "date-fns": "latest",
    }

    if features.better_auth:
        dependencies["better-auth"] = "latest"
    if features.database:
        dependencies["@prisma/client"] = "latest"
    if features.nodemailer:
        dependencies["nodemailer"] = "latest"
        dependencies["@types/nodemailer"] = "latest"

    if components.price_input:
        dependencies["react-number-format"] = "latest"
    if components.phone_input:
        dependencies["react-phone-number-input"] = "latest"

    return dependencies


def build_dev_dependencies(config: ProjectConfig) -> dict[str, str]:
    features = config.features
    dev: dict[str, str] = {}

    if features.database:
        dev["prisma"] = "latest"
        dev["tsx"] = "latest"
        dev["concurrently"] = "latest"

    if features.linting:
        dev["eslint"] = "latest"
        dev["eslint-config-next"] = "latest"
        dev["eslint-config-prettier"] = "latest"
        dev["@typescript-eslint/eslint-plugin"] = "latest"
        dev["@typescript-eslint/parser"] = "latest"
        dev["eslint-plugin-react"] = "latest"
        dev["eslint-plugin-react-hooks"] = "latest"
        dev["prettier"] = "latest"
        dev["prettier-plugin-tailwindcss"] = "latest"

    if features.husky:
        dev["husky"] = "latest"
        dev["lint-staged"] = "latest"

    return dev


def npm_package_name(project_name: str) -> str:
    """Coerce a directory name into a valid npm package name (lowercase, url-safe)."""
    name = re.sub(r"[^a-z0-9._~-]+", "-", project_name.strip().lower())
    return name.strip("-._") or "app"


def build_package_json(config: ProjectConfig) -> dict[str, Any]:
    """Return the complete ``package.json`` document for *config*."""
    package: dict[str, Any] = {
        "name": npm_package_name(config.project_name),
        "version": "0.1.0",
        "private": True,
        "scripts": build_scripts(config),
        "dependencies": build_dependencies(config),
        "devDependencies": build_dev_dependencies(config),
    }

    if config.features.husky and config.features.linting:
        package["lint-staged"] = {
            "*.{js,jsx,ts,tsx}": ["eslint --fix", "prettier --write"],
            "*.{json,css,md}": ["prettier --write"],
        }

    if config.features.database:
        package["prisma"] = {"seed": "tsx prisma/seed.ts"}

    return package
