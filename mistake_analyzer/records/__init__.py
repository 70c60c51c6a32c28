# ==============================================
# TOPIC 1: RECORDS
# ==============================================
#
# This package holds the mistake record itself and the
# guards every user-supplied field passes through BEFORE it
# reaches the classifier or the store.
#
# Modules:
# --------
# - mistake.py     → Mistake dataclass, Severity enum, id/date helpers
# - validation.py  → Description / date / severity checks
#
# ==============================================

from .mistake import Mistake, Severity, generate_id
from .validation import (
    clean_resolution,
    validate_date,
    validate_description,
    validate_severity,
)

__all__ = [
    "Mistake",
    "Severity",
    "generate_id",
    "clean_resolution",
    "validate_date",
    "validate_description",
    "validate_severity",
]
