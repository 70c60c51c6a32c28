# ==============================================
# CategoryStats / PatternInsights
# ==============================================
#
# PURPOSE:
#   Data classes that hold the OUTPUT of one pattern analysis pass.
#   Nothing here is persisted; the analyzer rebuilds them from the
#   current records on every call.
#
# CLASS: CategoryStats (dataclass)
# --------------------------------
#   Attributes:
#   -----------
#   - category: Category
#   - count: int              → occurrences in the analyzed records
#   - total: int              → number of analyzed records
#   - is_pattern: bool        → count >= pattern threshold
#   - is_critical: bool       → count >= critical threshold
#
#   Computed Properties:
#   --------------------
#   - share -> float          → count / total (0.0 when total is 0)
#   - name -> str             → human-readable name ("POOR PLANNING")
#
# CLASS: PatternInsights (dataclass)
# ----------------------------------
#   Everything the presentation layer shows in its analysis panel:
#   totals, frequencies, the most frequent category and its
#   suggestion, critical/plain pattern lists and the rendered report.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .category import Category, display_name


@dataclass
class CategoryStats:
    """Frequency of one category within an analyzed record set."""

    category: Category
    count: int
    total: int
    is_pattern: bool = False
    is_critical: bool = False

    @property
    def share(self) -> float:
        """Fraction of all analyzed records that fall in this category."""
        if self.total == 0:
            return 0.0
        return self.count / self.total

    @property
    def name(self) -> str:
        return display_name(self.category)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for JSON output.

        Returns:
            A JSON-serializable dictionary
        """
        return {
            "category": self.category.name,
            "name": self.name,
            "count": self.count,
            "share": round(self.share, 4),
            "is_pattern": self.is_pattern,
            "is_critical": self.is_critical,
        }


@dataclass
class PatternInsights:
    """Result of a full analysis pass over the current records."""

    total: int
    frequencies: Dict[Category, int] = field(default_factory=dict)
    most_frequent: Optional[Category] = None
    suggestion: str = ""
    critical: List[CategoryStats] = field(default_factory=list)
    patterns: List[CategoryStats] = field(default_factory=list)
    report: str = ""

    @property
    def has_patterns(self) -> bool:
        return bool(self.critical or self.patterns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "frequencies": {
                category.name: count for category, count in self.frequencies.items()
            },
            "most_frequent": self.most_frequent.name if self.most_frequent else None,
            "suggestion": self.suggestion,
            "critical_patterns": [stats.to_dict() for stats in self.critical],
            "patterns": [stats.to_dict() for stats in self.patterns],
            "report": self.report,
        }
