from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class DetectionSummary:
    """Outcome of one detection pass over a single target date."""

    target_date: date
    checked: int = 0
    absences: int = 0
    recovery_skips: int = 0
    evidence_skips: int = 0
    failed: int = 0
    skipped_reason: Optional[str] = None

