# ==============================================
# CategoryClassifier
# ==============================================
#
# PURPOSE:
#   Maps a free-text mistake description to exactly one Category by
#   counting keyword hits from the static keyword table.
#
# CLASS: CategoryClassifier
# -------------------------
#   Stateless: the keyword table is fixed at construction.
#
#   Constructor:
#   ------------
#   - __init__(keyword_table: Mapping[Category, tuple[str, ...]] = CATEGORY_KEYWORDS)
#
#   Methods:
#   --------
#   - detect_category(description: str | None) -> Category
#       RULE 1: None / empty / whitespace-only        → UNKNOWN
#       RULE 2: score every category (see score())
#       RULE 3: strictly highest score > 0 wins
#       RULE 4: equal top scores → earliest in Category declaration order
#       RULE 5: nothing scored                        → UNKNOWN
#
#   - score(description: str | None) -> dict[Category, int]
#       Number of distinct configured keywords found as a substring of
#       the lowercased description. A keyword counts once no matter how
#       often it occurs. Zero scores are left out.
#
#   - matched_keywords(description: str | None) -> dict[Category, list[str]]
#       The keywords behind each score, for explanations.
#
# ==============================================

from typing import Dict, List, Mapping, Optional, Tuple

from .category import CATEGORY_KEYWORDS, Category, declaration_rank


class CategoryClassifier:
    """
    Keyword-based category detection.

    Matching is plain case-insensitive substring containment, so "fix"
    also matches "prefix" and "late" matches "later".
    """

    def __init__(
        self,
        keyword_table: Mapping[Category, Tuple[str, ...]] = CATEGORY_KEYWORDS
    ):
        """
        Initialize the classifier.

        Args:
            keyword_table: Category -> keywords. Keywords are lowercased here
                           so a custom table may use any case.
        """
        # Visit categories in declaration order so ties resolve the same way every run
        self._keywords: List[Tuple[Category, Tuple[str, ...]]] = sorted(
            (
                (category, tuple(keyword.lower() for keyword in keywords))
                for category, keywords in keyword_table.items()
                if category is not Category.UNKNOWN
            ),
            key=lambda item: declaration_rank(item[0])
        )

    def detect_category(self, description: Optional[str]) -> Category:
        """
        Detect the category of a mistake description.

        Args:
            description: Free text, may be None or blank

        Returns:
            The best-scoring Category, or Category.UNKNOWN
        """
        scores = self.score(description)

        best_category = Category.UNKNOWN
        best_score = 0

        # scores is in declaration order; strict > keeps the earliest on ties
        for category, score in scores.items():
            if score > best_score:
                best_category = category
                best_score = score

        return best_category

    def score(self, description: Optional[str]) -> Dict[Category, int]:
        """
        Count keyword hits per category.

        Args:
            description: Free text, may be None or blank

        Returns:
            Category -> hit count, only for categories with at least one hit
        """
        return {
            category: len(keywords)
            for category, keywords in self.matched_keywords(description).items()
        }

    def matched_keywords(self, description: Optional[str]) -> Dict[Category, List[str]]:
        """
        List the configured keywords found in the description.

        Args:
            description: Free text, may be None or blank

        Returns:
            Category -> matched keywords (table order), only non-empty entries
        """
        if description is None or not description.strip():
            return {}

        text = description.lower()
        matches: Dict[Category, List[str]] = {}

        for category, keywords in self._keywords:
            hits = [keyword for keyword in keywords if keyword in text]
            if hits:
                matches[category] = hits

        return matches
