"""
Data types passed between pipeline stages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Company names are opaque; blank lines yield "" and duplicates are kept.
CompanyName = str


@dataclass(frozen=True)
class SearchResult:
    company: CompanyName
    url: str


@dataclass(frozen=True)
class ContactRecord:
    """Final company/email pairing. ``email`` is empty when none was found."""
    company: CompanyName
    email: str = ""

    def to_line(self) -> str:
        return f"{self.company} : {self.email}\n"


class PipelineOutcome(Enum):
    EXTRACTED = "extracted"
    NO_EMAIL = "no_email"
    RESOLUTION_FAILED = "resolution_failed"
    VALIDATION_FAILED = "validation_failed"
    SKIPPED = "skipped"
    FETCH_FAILED = "fetch_failed"

    @property
    def succeeded(self) -> bool:
        return self is PipelineOutcome.EXTRACTED


@dataclass
class CompanyResult:
    """What happened to one company: outcome, the URL it reached, and why it stopped."""
    company: CompanyName
    outcome: PipelineOutcome
    url: str = ""
    email: str = ""
    error: Optional[Exception] = None
    written: bool = False

    @property
    def record(self) -> ContactRecord:
        return ContactRecord(self.company, self.email)
