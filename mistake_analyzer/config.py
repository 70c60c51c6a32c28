# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - StorageConfig (dataclass)
#     data_file: str               (default "mistakes_data.txt")
#     backup_on_save: bool         (default False)
#
# - AnalysisConfig (dataclass)
#     pattern_threshold: int            (default 3)
#     critical_pattern_threshold: int   (default 5)
#
# - AppConfig (dataclass)
#     storage: StorageConfig
#     analysis: AnalysisConfig
#     log_level: str               (default "WARNING")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests change the environment).
#
# USAGE:
# ------
#   from mistake_analyzer.config import get_config
#   config = get_config()
#   print(config.storage.data_file)
#   print(config.analysis.pattern_threshold)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from mistake_analyzer.analysis.category import PatternThresholds


@dataclass
class StorageConfig:
    """Flat-file storage configuration."""
    data_file: str = "mistakes_data.txt"
    backup_on_save: bool = False


@dataclass
class AnalysisConfig:
    """Pattern detection thresholds."""
    pattern_threshold: int = 3
    critical_pattern_threshold: int = 5

    def to_thresholds(self) -> PatternThresholds:
        """
        Build the analyzer thresholds.

        Raises:
            ValueError: if critical <= pattern or pattern <= 0
        """
        return PatternThresholds(
            pattern_threshold=self.pattern_threshold,
            critical_pattern_threshold=self.critical_pattern_threshold,
        )


@dataclass
class AppConfig:
    """Main application configuration."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build storage configuration
    storage_config = StorageConfig(
        data_file=os.getenv("MISTAKES_DATA_FILE", "mistakes_data.txt"),
        backup_on_save=_env_bool("MISTAKES_BACKUP_ON_SAVE", False)
    )

    # Build analysis configuration
    analysis_config = AnalysisConfig(
        pattern_threshold=_env_int("PATTERN_THRESHOLD", 3),
        critical_pattern_threshold=_env_int("CRITICAL_PATTERN_THRESHOLD", 5)
    )

    # Build main application configuration
    _config_instance = AppConfig(
        storage=storage_config,
        analysis=analysis_config,
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
