# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - clean_env (autouse)   → no MISTAKES_* / threshold env leaks, fresh config singleton
# - today                 → fixed "today" so date validation is deterministic
# - data_file             → tmp_path location for the flat data file
# - app_config            → AppConfig pointing at data_file
# - app                   → TrackAndAnalyze over an empty data file
# - sample_mistake        → one fully populated Mistake
#
# ==============================================

from datetime import date

import pytest

from mistake_analyzer.analysis.category import Category
from mistake_analyzer.config import AppConfig, StorageConfig, reset_config
from mistake_analyzer.records.mistake import Mistake, Severity
from mistake_analyzer.track_and_analyze import TrackAndAnalyze


ENV_VARS = (
    "MISTAKES_DATA_FILE",
    "MISTAKES_BACKUP_ON_SAVE",
    "PATTERN_THRESHOLD",
    "CRITICAL_PATTERN_THRESHOLD",
    "LOG_LEVEL",
)

TODAY = date(2024, 6, 1)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from the developer's environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "mistakes_data.txt"


@pytest.fixture
def app_config(data_file):
    return AppConfig(storage=StorageConfig(data_file=str(data_file)))


@pytest.fixture
def app(app_config):
    return TrackAndAnalyze(app_config, today=lambda: TODAY)


@pytest.fixture
def sample_mistake():
    return Mistake(
        id="MST-0000ABCD",
        description="Forgot to run the tests before the release",
        category=Category.POOR_PLANNING,
        severity=Severity.HIGH,
        date=date(2024, 1, 15),
        resolution="Run the suite in CI",
    )
