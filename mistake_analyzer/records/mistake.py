# ==============================================
# Mistake (Data Classes)
# ==============================================
#
# PURPOSE:
#   The record the user logs, and its severity scale.
#
# ENUMS:
# ------
# - Severity(Enum): LOW, MEDIUM, HIGH
#     Persisted by member name; .display_name is what the UI shows.
#
# CLASSES:
# --------
# - Mistake (dataclass)
#     - id: str                  → "MST-" + 8 uppercase hex chars
#     - description: str
#     - category: Category       → detected, never typed in by the user
#     - severity: Severity
#     - date: datetime.date
#     - resolution: str          → lesson learned, may be empty
#
#     Methods:
#     --------
#     - to_dict() -> dict
#     - from_dict(data: dict) -> Mistake  (classmethod)
#
# ==============================================

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict

from mistake_analyzer.analysis.category import Category, parse_category


DATE_FORMAT = "%Y-%m-%d"
ID_PREFIX = "MST-"


class Severity(Enum):
    """How much a mistake hurt."""
    LOW = "Low Priority"
    MEDIUM = "Medium Priority"
    HIGH = "High Priority"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Severity":
        """
        Resolve a severity from its name ("high") or display name ("High Priority").

        Raises:
            ValueError: if nothing matches
        """
        key = text.strip().lower()
        for severity in cls:
            if key in (severity.name.lower(), severity.value.lower()):
                return severity
        raise ValueError(f"Unknown severity: {text!r}")


def generate_id() -> str:
    """Generate a short record id, e.g. "MST-1A2B3C4D"."""
    return ID_PREFIX + uuid.uuid4().hex[:8].upper()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError on anything else."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


@dataclass
class Mistake:
    """A single logged mistake."""

    id: str
    description: str
    category: Category
    severity: Severity
    date: date
    resolution: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the record to a dictionary (for JSON output).

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "id": self.id,
            "description": self.description,
            "category": self.category.name,   # Enum name is the stable form
            "severity": self.severity.name,
            "date": format_date(self.date),
            "resolution": self.resolution,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mistake":
        """
        Reconstruct a Mistake from its dictionary form.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            A Mistake instance
        """
        return cls(
            id=data["id"],
            description=data["description"],
            category=parse_category(data.get("category", Category.UNKNOWN.name)),
            severity=Severity[data["severity"]],
            date=parse_date(data["date"]),
            resolution=data.get("resolution") or "",
        )
