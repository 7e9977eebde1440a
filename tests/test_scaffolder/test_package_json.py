"""Tests for the generated package.json document."""

from __future__ import annotations

import pytest

from wm_stack.config import PackageManager, ReactVersion
from wm_stack.scaffolder.package_json import (
    build_package_json,
    exec_prefix,
    npm_package_name,
    run_prefix,
)

from conftest import make_config

pytestmark = pytest.mark.unit


class TestPrefixes:
    @pytest.mark.parametrize(
        "pm, run, exe",
        [
            (PackageManager.NPM, "npm run", "npx"),
            (PackageManager.PNPM, "pnpm", "pnpm"),
            (PackageManager.YARN, "yarn", "yarn"),
        ],
    )
    def test_prefixes(self, pm, run, exe):
        assert run_prefix(pm) == run
        assert exec_prefix(pm) == exe


class TestScripts:
    def test_base_scripts_always_present(self, minimal_config):
        scripts = build_package_json(minimal_config)["scripts"]
        assert scripts == {"dev": "next dev", "build": "next build", "start": "next start"}

    def test_setup_chain_uses_package_manager(self):
        config = make_config(features=["database"], package_manager=PackageManager.NPM)
        setup = build_package_json(config)["scripts"]["setup"]
        assert setup == (
            "npm install && npx prisma db push --force-reset && npx prisma generate"
            " && npx prisma db seed && npm run dev"
        )

    def test_database_scripts(self):
        scripts = build_package_json(make_config(features=["database"]))["scripts"]
        for name in ("db:push", "db:seed", "db:generate", "db:studio", "dev:studio"):
            assert name in scripts
        assert '"pnpm dev" "pnpm db:studio"' in scripts["dev:studio"]

    def test_husky_prepare(self):
        assert build_package_json(make_config(features=["husky"]))["scripts"]["prepare"] == "husky"

    def test_linting_scripts(self):
        scripts = build_package_json(make_config(features=["linting"]))["scripts"]
        assert scripts["lint"] == "next lint"
        assert scripts["format"] == "prettier --write ."


class TestDependencies:
    @pytest.mark.parametrize("version, pin", [(ReactVersion.REACT_18, "^18"), (ReactVersion.REACT_19, "^19")])
    def test_react_pins(self, version, pin):
        package = build_package_json(make_config(react_version=version))
        assert package["dependencies"]["react"].startswith(pin)
        assert package["dependencies"]["react-dom"].startswith(pin)

    def test_feature_dependencies(self, full_config):
        package = build_package_json(full_config)
        deps, dev = package["dependencies"], package["devDependencies"]
        assert {"better-auth", "@prisma/client", "nodemailer"} <= deps.keys()
        assert {"react-number-format", "react-phone-number-input"} <= deps.keys()
        assert {"prisma", "eslint", "prettier", "husky", "lint-staged"} <= dev.keys()

    def test_minimal_has_no_optional_packages(self, minimal_config):
        package = build_package_json(minimal_config)
        assert package["devDependencies"] == {}
        assert "better-auth" not in package["dependencies"]
        assert "@prisma/client" not in package["dependencies"]


class TestDocument:
    def test_lint_staged_needs_husky_and_linting(self):
        assert "lint-staged" in build_package_json(make_config(features=["husky", "linting"]))
        assert "lint-staged" not in build_package_json(make_config(features=["husky"]))

    def test_prisma_seed(self):
        package = build_package_json(make_config(features=["database"]))
        assert package["prisma"] == {"seed": "tsx prisma/seed.ts"}

    def test_key_order(self, default_config):
        keys = list(build_package_json(default_config))
        assert keys[:6] == ["name", "version", "private", "scripts", "dependencies", "devDependencies"]

    @pytest.mark.parametrize(
        "name, expected",
        [("my-app", "my-app"), ("My App", "my-app"), ("  Shop!!  ", "shop"), ("@@@", "app")],
    )
    def test_npm_package_name(self, name, expected):
        assert npm_package_name(name) == expected
