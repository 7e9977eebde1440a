"""Tests for the configuration record."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wm_stack.config import (
    ActionFlags,
    ComponentFlags,
    FeatureFlags,
    HookFlags,
    PackageManager,
    ProjectConfig,
    ReactVersion,
)

from conftest import make_config

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_feature_defaults(self):
        features = FeatureFlags()
        assert features.selected() == ["database", "better_auth", "docker", "husky", "linting"]
        assert features.nodemailer is False

    def test_component_defaults(self):
        assert ComponentFlags().selected() == ["data_table", "custom_inputs"]

    def test_hooks_and_actions_default_off(self):
        assert HookFlags().selected() == []
        assert ActionFlags().selected() == []
        assert len(HookFlags.model_fields) == 23

    def test_record_defaults(self, default_config):
        assert default_config.package_manager is PackageManager.PNPM
        assert default_config.react_version is ReactVersion.REACT_18
        assert default_config.init_in_current_dir is False
        assert default_config.pm == "pnpm"


class TestValidation:
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name="")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name="x", typescript=True)

    def test_actions_require_database(self):
        with pytest.raises(ValidationError, match="require the database feature"):
            make_config(actions=["contact_submission"])

    def test_actions_with_database_accepted(self):
        config = make_config(features=["database"], actions=["newsletter_subscription"])
        assert config.actions.newsletter_subscription is True

    def test_frozen(self, default_config):
        with pytest.raises(ValidationError):
            default_config.project_name = "other"

    def test_from_selection_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown HookFlags flags: use_nothing"):
            HookFlags.from_selection(["use_debounce", "use_nothing"])


class TestViews:
    def test_selected_groups(self):
        config = make_config(
            features=["database"],
            components=["phone_input"],
            hooks=["use_toggle"],
            actions=["contact_submission"],
        )
        assert config.selected() == {
            "features": ["database"],
            "components": ["phone_input"],
            "hooks": ["use_toggle"],
            "actions": ["contact_submission"],
        }

    def test_any(self):
        assert ComponentFlags.from_selection([]).any() is False
        assert ComponentFlags.from_selection(["price_input"]).any() is True


class TestSerialisation:
    def test_save_load_preserves_record(self, tmp_path, full_config):
        path = full_config.save(tmp_path / "nested" / "stack.json")
        assert path.exists()
        assert ProjectConfig.load(path) == full_config

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"project_name": "x", "package_manager": "bun"}', encoding="utf-8")
        with pytest.raises(ValidationError):
            ProjectConfig.load(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            ProjectConfig.load(tmp_path / "missing.json")
