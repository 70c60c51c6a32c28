# ==============================================
# TOPIC 2: ANALYSIS & CLASSIFICATION
# ==============================================
#
# This package turns mistake descriptions into categories and
# turns the categories of all current records into insights.
#
# Two-step process:
#   Step 1 (Classification): description → keyword scores → Category
#   Step 2 (Analysis):       categories → frequencies → patterns → report
#
# Modules:
# --------
# - category.py          → Category enum, keyword & suggestion tables, thresholds
# - classifier.py        → Keyword-based category detection
# - pattern_analyzer.py  → Frequencies, pattern flags, report, suggestions
# - category_stats.py    → Data classes for analysis results
#
# ==============================================

from .category import (
    CATEGORY_KEYWORDS,
    CATEGORY_SUGGESTIONS,
    NOT_APPLICABLE,
    Category,
    PatternThresholds,
    display_name,
    parse_category,
)
from .classifier import CategoryClassifier
from .category_stats import CategoryStats, PatternInsights
from .pattern_analyzer import PatternAnalyzer

__all__ = [
    "CATEGORY_KEYWORDS",
    "CATEGORY_SUGGESTIONS",
    "NOT_APPLICABLE",
    "Category",
    "PatternThresholds",
    "display_name",
    "parse_category",
    "CategoryClassifier",
    "CategoryStats",
    "PatternInsights",
    "PatternAnalyzer",
]
