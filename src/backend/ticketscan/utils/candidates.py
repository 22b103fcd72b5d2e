"""
Candidate dataclass for field extraction.

A candidate is the nullable value one strategy produced for one field,
tagged with the strategy name so debugging output can show which
strategy won arbitration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldCandidate:
    """Value produced by a single extraction strategy (None = no match)."""
    value: Optional[str]
    strategy: str

    @property
    def is_usable(self) -> bool:
        return self.value is not None and self.value.strip() != ''
