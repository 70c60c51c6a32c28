# ==============================================
# Category (Data Classes & Static Tables)
# ==============================================
#
# PURPOSE:
#   The closed set of mistake categories, the keyword table the
#   classifier matches against, the prevention suggestion for each
#   category, and the thresholds that turn a frequency into a
#   "pattern" or a "critical pattern".
#
# WHY THIS FILE EXISTS:
#   Keeping the data separate from the logic keeps the classifier and
#   the analyzer small. The enum carries no behavior; suggestions live
#   in their own lookup table.
#
# ENUMS:
# ------
# - Category(Enum): PROCRASTINATION, POOR_PLANNING, OVERCONFIDENCE,
#                   LACK_OF_FOCUS, TECHNICAL, COMMUNICATION, UNKNOWN
#     The member name is the persisted form in the data file.
#     Declaration order is the tie-break order everywhere.
#
# TABLES (read-only mappings):
# ----------------------------
# - CATEGORY_KEYWORDS:    Category -> tuple of lowercase keywords
# - CATEGORY_SUGGESTIONS: Category -> prevention suggestion
#
# CLASSES:
# --------
# - PatternThresholds (dataclass)
#     - pattern_threshold: int           (default 3)
#     - critical_pattern_threshold: int  (default 5)
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


class Category(Enum):
    """
    Enumeration of mistake categories.

    UNKNOWN is the fallback when no keyword matches.
    """
    PROCRASTINATION = "PROCRASTINATION"
    POOR_PLANNING = "POOR_PLANNING"
    OVERCONFIDENCE = "OVERCONFIDENCE"
    LACK_OF_FOCUS = "LACK_OF_FOCUS"
    TECHNICAL = "TECHNICAL"
    COMMUNICATION = "COMMUNICATION"
    UNKNOWN = "UNKNOWN"


# Returned by suggestion() when there is no category to suggest for
NOT_APPLICABLE = "N/A"

GENERIC_SUGGESTION = "Review and analyze the situation"


CATEGORY_KEYWORDS: Mapping[Category, Tuple[str, ...]] = MappingProxyType({
    Category.PROCRASTINATION: (
        "late", "delay", "delayed", "postpone", "postponed",
        "procrastinate", "procrastinated", "put off", "tomorrow",
    ),
    Category.POOR_PLANNING: (
        "forgot", "forgotten", "rushed", "rush", "hurry", "hurried",
        "no plan", "unplanned", "last minute", "unprepared",
    ),
    Category.OVERCONFIDENCE: (
        "assumed", "assume", "ignored", "ignore", "skipped",
        "skip", "overconfident", "easy", "obvious", "didn't check",
    ),
    Category.LACK_OF_FOCUS: (
        "distracted", "distraction", "unfocused", "lost focus",
        "interrupted", "multitask", "multitasking", "sidetracked",
    ),
    Category.TECHNICAL: (
        "bug", "error", "crash", "exception", "code", "syntax",
        "compile", "runtime", "debug", "fix", "broken", "failed",
    ),
    Category.COMMUNICATION: (
        "misunderstood", "misunderstand", "miscommunication",
        "unclear", "confused", "wrong requirement", "didn't ask",
        "should have asked", "misread", "misinterpreted",
    ),
})


CATEGORY_SUGGESTIONS: Mapping[Category, str] = MappingProxyType({
    Category.PROCRASTINATION: "Use time-boxing and deadlines",
    Category.POOR_PLANNING: "Plan tasks before execution",
    Category.OVERCONFIDENCE: "Add validation checkpoints",
    Category.LACK_OF_FOCUS: "Reduce distractions",
    Category.TECHNICAL: "Improve testing and code review",
    Category.COMMUNICATION: "Clarify requirements early",
    Category.UNKNOWN: GENERIC_SUGGESTION,
})


def declaration_rank(category: Category) -> int:
    """Position of the category in the enum declaration (used for tie-breaks)."""
    return _DECLARATION_RANK[category]


_DECLARATION_RANK: Dict[Category, int] = {
    category: index for index, category in enumerate(Category)
}


def display_name(category: Optional[Category]) -> str:
    """
    Human-readable category name for reports and tables.

    Examples:
        display_name(Category.POOR_PLANNING) -> "POOR PLANNING"
        display_name(None)                   -> "N/A"
    """
    if category is None:
        return NOT_APPLICABLE
    return category.name.replace("_", " ")


def parse_category(name: str) -> Category:
    """
    Resolve a persisted or user-typed category name.

    Accepts "POOR_PLANNING", "poor_planning" and "poor planning".

    Raises:
        ValueError: if the name is not a Category
    """
    key = name.strip().upper().replace(" ", "_")
    try:
        return Category[key]
    except KeyError:
        raise ValueError(f"Unknown category: {name!r}") from None


@dataclass(frozen=True)
class PatternThresholds:
    """
    Occurrence counts at which a category becomes a pattern.

    Thresholds are nested: anything critical is also a pattern.
    """

    pattern_threshold: int = 3
    """A category seen this many times (or more) is a recurring pattern."""

    critical_pattern_threshold: int = 5
    """A category seen this many times (or more) is a critical pattern."""

    def __post_init__(self):
        if self.pattern_threshold <= 0:
            raise ValueError("pattern_threshold must be positive")
        if self.critical_pattern_threshold <= self.pattern_threshold:
            raise ValueError(
                "critical_pattern_threshold must be greater than pattern_threshold "
                f"({self.critical_pattern_threshold} <= {self.pattern_threshold})"
            )
