# ==============================================
# PatternAnalyzer
# ==============================================
#
# PURPOSE:
#   Given the categories of all current mistake records, count how
#   often each category occurs, flag recurring ("pattern") and
#   heavily recurring ("critical pattern") categories, and render a
#   report for display.
#
# CLASS: PatternAnalyzer
# ----------------------
#   Stateless: the frequency tally is rebuilt on every call, nothing
#   is cached between calls.
#
#   Constructor:
#   ------------
#   - __init__(thresholds: PatternThresholds | None = None)
#
#   Methods:
#   --------
#   - frequencies(categories) -> dict[Category, int]
#   - most_frequent(categories) -> Category | None
#   - is_pattern(count) -> bool
#   - is_critical_pattern(count) -> bool
#   - classify_patterns(categories) -> (critical, plain)
#       Two mutually exclusive lists of CategoryStats. A critical
#       category never shows up in the plain list.
#   - report(categories) -> str
#   - suggestion(category) -> str
#   - insights(categories) -> PatternInsights
#
#   Ordering:
#   ---------
#   All tie-breaks use Category declaration order. Report entries are
#   sorted by descending count, then declaration order.
#
# ==============================================

from typing import Dict, Iterable, List, Optional, Tuple

from .category import (
    CATEGORY_SUGGESTIONS,
    GENERIC_SUGGESTION,
    NOT_APPLICABLE,
    Category,
    PatternThresholds,
    declaration_rank,
    display_name,
)
from .category_stats import CategoryStats, PatternInsights


NO_DATA_MESSAGE = "No mistakes recorded yet. Add some to see patterns!"
NO_PATTERNS_MESSAGE = "✅ No recurring patterns detected yet."
CRITICAL_HEADING = "⚠️ CRITICAL PATTERNS:"
PATTERN_HEADING = "📊 Detected Patterns:"


class PatternAnalyzer:
    """
    Frequency-based pattern detection over a sequence of categories.
    """

    def __init__(self, thresholds: Optional[PatternThresholds] = None):
        """
        Initialize the PatternAnalyzer.

        Args:
            thresholds: Optional PatternThresholds. Defaults to 3 (pattern)
                        and 5 (critical pattern).
        """
        self.thresholds = thresholds or PatternThresholds()

    def frequencies(self, categories: Optional[Iterable[Category]]) -> Dict[Category, int]:
        """
        Count occurrences of each category.

        Args:
            categories: Categories of the current records (may be empty or None)

        Returns:
            Category -> count, in Category declaration order. Categories that
            do not occur are absent.
        """
        if categories is None:
            return {}

        tally: Dict[Category, int] = {}
        for category in categories:
            tally[category] = tally.get(category, 0) + 1

        return {
            category: tally[category]
            for category in sorted(tally, key=declaration_rank)
        }

    def most_frequent(self, categories: Optional[Iterable[Category]]) -> Optional[Category]:
        """
        Return the category with the highest occurrence count.

        Args:
            categories: Categories of the current records

        Returns:
            The most frequent Category (earliest declared on ties), or None
            when there is nothing to analyze
        """
        most_frequent = None
        max_count = 0

        for category, count in self.frequencies(categories).items():
            if count > max_count:
                most_frequent = category
                max_count = count

        return most_frequent

    def is_pattern(self, count: int) -> bool:
        """True if a category seen `count` times is a recurring pattern."""
        return count >= self.thresholds.pattern_threshold

    def is_critical_pattern(self, count: int) -> bool:
        """True if a category seen `count` times is a critical pattern."""
        return count >= self.thresholds.critical_pattern_threshold

    def classify_patterns(
        self,
        categories: Optional[Iterable[Category]]
    ) -> Tuple[List[CategoryStats], List[CategoryStats]]:
        """
        Split recurring categories into critical and plain patterns.

        Critical is checked first and supersedes plain, so the two lists
        never share a category.

        Args:
            categories: Categories of the current records

        Returns:
            Tuple of (critical, plain), each sorted by descending count then
            declaration order
        """
        frequencies = self.frequencies(categories)
        total = sum(frequencies.values())

        critical: List[CategoryStats] = []
        plain: List[CategoryStats] = []

        for category, count in self._ranked(frequencies):
            if self.is_critical_pattern(count):
                critical.append(CategoryStats(category, count, total, is_pattern=True, is_critical=True))
            elif self.is_pattern(count):
                plain.append(CategoryStats(category, count, total, is_pattern=True))

        return critical, plain

    def report(self, categories: Optional[Iterable[Category]]) -> str:
        """
        Render the pattern report shown in the analysis panel.

        Args:
            categories: Categories of the current records

        Returns:
            Multi-line report text
        """
        categories = list(categories or [])
        if not categories:
            return NO_DATA_MESSAGE

        critical, plain = self.classify_patterns(categories)
        return self._render(critical, plain)

    def suggestion(self, category: Optional[Category]) -> str:
        """
        Return the prevention suggestion for a category.

        Args:
            category: A Category, or None when nothing is known

        Returns:
            The category's suggestion; NOT_APPLICABLE ("N/A") for None
        """
        if category is None:
            return NOT_APPLICABLE
        return CATEGORY_SUGGESTIONS.get(category, GENERIC_SUGGESTION)

    def insights(self, categories: Optional[Iterable[Category]]) -> PatternInsights:
        """
        Run every analysis over one snapshot of categories.

        Args:
            categories: Categories of the current records

        Returns:
            PatternInsights for the presentation layer
        """
        categories = list(categories or [])
        frequencies = self.frequencies(categories)
        most_frequent = self.most_frequent(categories)

        if not categories:
            return PatternInsights(total=0, report=NO_DATA_MESSAGE)

        critical, plain = self.classify_patterns(categories)

        return PatternInsights(
            total=len(categories),
            frequencies=frequencies,
            most_frequent=most_frequent,
            suggestion=self.suggestion(most_frequent),
            critical=critical,
            patterns=plain,
            report=self._render(critical, plain),
        )

    def _ranked(self, frequencies: Dict[Category, int]) -> List[Tuple[Category, int]]:
        """Order (category, count) pairs by descending count, then declaration order."""
        return sorted(
            frequencies.items(),
            key=lambda item: (-item[1], declaration_rank(item[0]))
        )

    def _render(self, critical: List[CategoryStats], plain: List[CategoryStats]) -> str:
        if not critical and not plain:
            return NO_PATTERNS_MESSAGE

        lines: List[str] = []
        if critical:
            lines.append(CRITICAL_HEADING)
            lines.extend(self._format_entry(stats) for stats in critical)
        if plain:
            lines.append(PATTERN_HEADING)
            lines.extend(self._format_entry(stats) for stats in plain)

        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_entry(stats: CategoryStats) -> str:
        return f"  • {display_name(stats.category)} ({stats.count} times)"
