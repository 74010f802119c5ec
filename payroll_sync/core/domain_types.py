"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RssbNumber, Matricule, Period wrap str — business keys, never bare strings in services
    - Period is always YYYY-MM (enforced by core/validation.py)
    - All valid lookup outcomes encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RssbNumber = NewType("RssbNumber", str)
Matricule = NewType("Matricule", str)
Period = NewType("Period", str)             # YYYY-MM


# ─── Enums ───────────────────────────────────────────────────────

class EmployeeLookupStatus(str, Enum):
    """Outcome of a read-repair employee lookup."""
    FOUND = "found"               # served from the local store
    SYNCED = "synced"             # fetched from oracle and persisted locally
    NOT_FOUND = "not_found"       # absent locally and oracle answered 404
    SYNC_FAILED = "sync_failed"   # absent locally and oracle call failed


class ContributionFilterField(str, Enum):
    """Single-field filters supported by the contribution store."""
    RSSB_NUMBER = "rssb_number"
    PERIOD = "period"
    MATRICULE = "matricule"
