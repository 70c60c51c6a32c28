# ==============================================
# Tests for configuration loading
# ==============================================

import pytest

from mistake_analyzer.config import AnalysisConfig, AppConfig, get_config, reset_config
from mistake_analyzer.track_and_analyze import TrackAndAnalyze


class TestDefaults:

    def test_defaults(self):
        config = get_config()
        assert config.storage.data_file == "mistakes_data.txt"
        assert config.storage.backup_on_save is False
        assert config.analysis.pattern_threshold == 3
        assert config.analysis.critical_pattern_threshold == 5
        assert config.log_level == "WARNING"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first

    def test_dataclass_defaults_match(self):
        assert AppConfig() == get_config()


class TestEnvironmentOverrides:

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("MISTAKES_DATA_FILE", "/tmp/elsewhere.txt")
        monkeypatch.setenv("MISTAKES_BACKUP_ON_SAVE", "true")
        monkeypatch.setenv("PATTERN_THRESHOLD", "2")
        monkeypatch.setenv("CRITICAL_PATTERN_THRESHOLD", "4")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = get_config()

        assert config.storage.data_file == "/tmp/elsewhere.txt"
        assert config.storage.backup_on_save is True
        assert config.analysis.pattern_threshold == 2
        assert config.analysis.critical_pattern_threshold == 4
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value, expected", [
        ("1", True), ("yes", True), ("ON", True),
        ("0", False), ("false", False), ("", False),
    ])
    def test_backup_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("MISTAKES_BACKUP_ON_SAVE", value)
        assert get_config().storage.backup_on_save is expected

    def test_non_numeric_threshold(self, monkeypatch):
        monkeypatch.setenv("PATTERN_THRESHOLD", "three")
        with pytest.raises(ValueError, match="PATTERN_THRESHOLD must be a whole number"):
            get_config()


class TestThresholdValidation:

    def test_to_thresholds(self):
        thresholds = AnalysisConfig(pattern_threshold=2, critical_pattern_threshold=6).to_thresholds()
        assert thresholds.pattern_threshold == 2
        assert thresholds.critical_pattern_threshold == 6

    def test_critical_must_exceed_pattern(self):
        with pytest.raises(ValueError):
            AnalysisConfig(pattern_threshold=5, critical_pattern_threshold=5).to_thresholds()

    def test_app_rejects_bad_thresholds(self, data_file):
        config = AppConfig(analysis=AnalysisConfig(pattern_threshold=0))
        config.storage.data_file = str(data_file)
        with pytest.raises(ValueError):
            TrackAndAnalyze(config)
