# ==============================================
# TrackAndAnalyze — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties all 3 topics together.
#   The CLI (or any other front end) talks to this class only.
#
# HOW IT CONNECTS THE 3 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     TrackAndAnalyze                      │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: RECORDS                             │        │
#   │  │  validate_description / _date / _severity    │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ clean fields                           │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: CLASSIFICATION                      │        │
#   │  │  CategoryClassifier.detect_category()        │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ Mistake                                │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: STORAGE                             │        │
#   │  │  MistakeStore → FlatFileStore                │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ categories()                           │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: ANALYSIS                            │        │
#   │  │  PatternAnalyzer.insights()                  │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: TrackAndAnalyze
# ----------------------
#
#   Constructor:
#   ------------
#   - __init__(config: AppConfig | None = None, today: callable | None = None)
#       1. Load config (from .env or passed in)
#       2. Build classifier + analyzer from the configured thresholds
#       3. Open the flat file and load existing records
#          (a load failure is reported and the store starts empty)
#
#   Public Methods (User-facing API):
#   ---------------------------------
#   - add_mistake(description, severity, mistake_date, resolution="") -> Mistake
#   - update_mistake(mistake_id, description=None, severity=None,
#                    mistake_date=None, resolution=None) -> Mistake
#   - delete_mistake(mistake_id) -> bool
#   - list_mistakes() -> list[Mistake]
#   - find(mistake_id) -> Mistake | None
#   - classify(description) -> Category
#   - categories() -> list[Category]
#   - most_frequent_category() -> Category | None
#   - pattern_report() -> str
#   - suggestion(category) -> str
#   - insights() -> PatternInsights
#
# ==============================================

import logging
from datetime import date
from typing import Callable, List, Optional, Union

from mistake_analyzer.config import AppConfig, get_config
from mistake_analyzer.errors import FileOperationError, InvalidMistakeError
from mistake_analyzer.analysis.category import Category
from mistake_analyzer.analysis.classifier import CategoryClassifier
from mistake_analyzer.analysis.pattern_analyzer import PatternAnalyzer
from mistake_analyzer.analysis.category_stats import PatternInsights
from mistake_analyzer.records.mistake import Mistake, Severity, generate_id
from mistake_analyzer.records.validation import (
    clean_resolution,
    validate_date,
    validate_description,
    validate_severity,
)
from mistake_analyzer.storage.flat_file import FlatFileStore
from mistake_analyzer.storage.mistake_store import MistakeStore

logger = logging.getLogger(__name__)


class TrackAndAnalyze:
    """
    Main orchestrator that integrates all 3 topics:
    1. Records (validation)
    2. Analysis & Classification
    3. Storage
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        today: Optional[Callable[[], date]] = None
    ):
        """
        Initialize the complete application with all components.

        Args:
            config: Application configuration. If None, loads from environment.
            today: Clock used for the "no future dates" rule. Defaults to date.today.
        """
        # Load configuration
        self._config = config or get_config()
        self._today = today or date.today

        # TOPIC 2: Analysis & Classification
        self._classifier = CategoryClassifier()
        self._analyzer = PatternAnalyzer(self._config.analysis.to_thresholds())

        # TOPIC 3: Storage
        self._flat_file = FlatFileStore(self._config.storage.data_file)
        self._store = self._open_store()

    # ======================================
    # Record operations
    # ======================================
    def add_mistake(
        self,
        description: Optional[str],
        severity: Union[str, Severity, None],
        mistake_date: Union[str, date, None],
        resolution: Optional[str] = ""
    ) -> Mistake:
        """
        Validate, classify and persist a new mistake.

        Args:
            description: What happened
            severity: Severity or its name ("low", "medium", "high")
            mistake_date: Date it happened (YYYY-MM-DD or a date)
            resolution: Optional lesson learned

        Returns:
            The stored Mistake with its generated id and detected category

        Raises:
            InvalidMistakeError: if any field fails validation
            FileOperationError: if the data file cannot be written
        """
        # TOPIC 1: Validate every field before touching anything else
        cleaned_description = validate_description(description)
        parsed_date = validate_date(mistake_date, today=self._today())
        parsed_severity = validate_severity(severity)

        # TOPIC 2: Detect the category
        category = self._classifier.detect_category(cleaned_description)

        mistake = Mistake(
            id=self._new_id(),
            description=cleaned_description,
            category=category,
            severity=parsed_severity,
            date=parsed_date,
            resolution=clean_resolution(resolution),
        )

        # TOPIC 3: Persist
        self._store.add(mistake)
        logger.info("Added %s (%s)", mistake.id, category.name)
        return mistake

    def update_mistake(
        self,
        mistake_id: str,
        description: Optional[str] = None,
        severity: Union[str, Severity, None] = None,
        mistake_date: Union[str, date, None] = None,
        resolution: Optional[str] = None
    ) -> Mistake:
        """
        Edit an existing mistake. None or blank arguments leave a field unchanged;
        resolution is the exception: "" clears it.

        A new description is re-validated and re-classified.

        Returns:
            The updated Mistake

        Raises:
            InvalidMistakeError: unknown id or invalid field
            FileOperationError: if the data file cannot be written
        """
        mistake = self._require(mistake_id)

        if description is not None and description.strip():
            mistake.description = validate_description(description)
            mistake.category = self._classifier.detect_category(mistake.description)

        if severity is not None and not (isinstance(severity, str) and not severity.strip()):
            mistake.severity = validate_severity(severity)

        if mistake_date is not None and not (isinstance(mistake_date, str) and not mistake_date.strip()):
            mistake.date = validate_date(mistake_date, today=self._today())

        if resolution is not None:
            mistake.resolution = clean_resolution(resolution)

        self._store.replace(mistake)
        logger.info("Updated %s", mistake.id)
        return mistake

    def delete_mistake(self, mistake_id: str) -> bool:
        """
        Delete a mistake by id.

        Returns:
            True once the record is gone

        Raises:
            InvalidMistakeError: if the id is unknown
        """
        self._require(mistake_id)
        self._store.delete(mistake_id)
        logger.info("Deleted %s", mistake_id)
        return True

    def list_mistakes(self) -> List[Mistake]:
        return self._store.list_all()

    def find(self, mistake_id: Optional[str]) -> Optional[Mistake]:
        return self._store.find_by_id(mistake_id)

    @property
    def count(self) -> int:
        return self._store.count

    @property
    def data_file(self):
        return self._flat_file.path

    # ======================================
    # Analysis
    # ======================================
    def classify(self, description: Optional[str]) -> Category:
        """Detect a category without storing anything."""
        return self._classifier.detect_category(description)

    def explain(self, description: Optional[str]) -> dict:
        """Keywords behind the classification, per category."""
        return self._classifier.matched_keywords(description)

    def categories(self) -> List[Category]:
        return self._store.categories()

    def most_frequent_category(self) -> Optional[Category]:
        return self._analyzer.most_frequent(self.categories())

    def pattern_report(self) -> str:
        return self._analyzer.report(self.categories())

    def suggestion(self, category: Optional[Category]) -> str:
        return self._analyzer.suggestion(category)

    def insights(self) -> PatternInsights:
        """
        Analyze the current record set in one pass.

        Returns:
            PatternInsights (frequencies, most frequent, suggestion, report)
        """
        return self._analyzer.insights(self.categories())

    @property
    def analyzer(self) -> PatternAnalyzer:
        return self._analyzer

    # ======================================
    # Internal helpers
    # ======================================
    def _open_store(self) -> MistakeStore:
        """
        Load saved records. A broken file must not stop the application
        from starting, so read failures fall back to an empty store.
        """
        store = MistakeStore(
            self._flat_file,
            backup_on_save=self._config.storage.backup_on_save,
            load=False
        )
        try:
            store.reload()
        except FileOperationError as e:
            logger.warning("Could not load data - %s", e)
            return store

        logger.info("Loaded %d mistakes from %s", store.count, self._flat_file.path)
        return store

    def _require(self, mistake_id: Optional[str]) -> Mistake:
        mistake = self._store.find_by_id(mistake_id)
        if mistake is None:
            raise InvalidMistakeError(f"Mistake not found with ID: {mistake_id}", "id")
        return mistake

    def _new_id(self) -> str:
        mistake_id = generate_id()
        while self._store.find_by_id(mistake_id) is not None:
            mistake_id = generate_id()
        return mistake_id

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        return False  # Don't suppress exceptions
