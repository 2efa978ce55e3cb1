"""Tests for DetectionController."""

import pytest

from translation_health.core.controller import (
    CONFIG_FIELDS,
    DetectionConfig,
    DetectionConfigError,
    DetectionController,
)
from translation_health.core.issue import IssueKind


class TestDetectionConfig:
    """Test cases for DetectionConfig."""

    def test_defaults(self):
        config = DetectionConfig()
        assert config.enabled is False
        assert config.detect_missing_keys is True
        assert config.detect_fallback_usage is True
        assert config.detect_hardcoded_strings is True
        assert config.detect_rtl_issues is True

    def test_immutable(self):
        with pytest.raises(Exception):
            DetectionConfig().enabled = True

    def test_to_dict(self):
        assert set(DetectionConfig().to_dict()) == set(CONFIG_FIELDS)


class TestToggle:
    """Test cases for the global switch."""

    def test_flip(self):
        controller = DetectionController()
        assert controller.toggle_detection() is True
        assert controller.is_detecting is True
        assert controller.toggle_detection() is False
        assert controller.is_detecting is False

    def test_set_explicitly(self):
        controller = DetectionController()
        assert controller.toggle_detection(True) is True
        assert controller.toggle_detection(True) is True

    def test_keeps_per_kind_toggles(self):
        controller = DetectionController()
        controller.update_config(detect_rtl_issues=False)
        controller.toggle_detection(True)
        assert controller.config.detect_rtl_issues is False


class TestKindEnabled:
    """Test cases for is_kind_enabled."""

    def test_global_switch_off_blocks_everything(self):
        controller = DetectionController()
        for kind in IssueKind:
            assert controller.is_kind_enabled(kind) is False

    def test_per_kind_toggles(self):
        controller = DetectionController(DetectionConfig(enabled=True))
        controller.update_config({'detect_fallback_usage': False})

        assert controller.is_kind_enabled(IssueKind.MISSING_TRANSLATION) is True
        assert controller.is_kind_enabled(IssueKind.FALLBACK_USED) is False
        assert controller.is_kind_enabled('hardcoded-string') is True


class TestUpdateConfig:
    """Test cases for update_config."""

    def test_partial_merge(self):
        controller = DetectionController()
        config = controller.update_config({'enabled': True}, detect_missing_keys=False)

        assert config.enabled is True
        assert config.detect_missing_keys is False
        assert config.detect_fallback_usage is True

    def test_unknown_field(self):
        controller = DetectionController()
        with pytest.raises(DetectionConfigError, match='detectEverything'):
            controller.update_config({'detectEverything': True})

    def test_non_bool_value(self):
        controller = DetectionController()
        with pytest.raises(DetectionConfigError):
            controller.update_config(enabled='yes')
        assert controller.config == DetectionConfig()

    def test_empty_update(self):
        controller = DetectionController()
        assert controller.update_config() == DetectionConfig()


class TestResetAndReplace:
    """Test cases for reset_config and replace."""

    def test_reset_restores_defaults(self):
        defaults = DetectionConfig(enabled=True, detect_rtl_issues=False)
        controller = DetectionController(defaults)
        controller.update_config(enabled=False, detect_missing_keys=False)

        assert controller.reset_config() == defaults
        assert controller.config == defaults

    def test_replace(self):
        controller = DetectionController()
        config = DetectionConfig(enabled=True, detect_hardcoded_strings=False)
        controller.replace(config)
        assert controller.config == config
        assert controller.defaults == DetectionConfig()
