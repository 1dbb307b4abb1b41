from dataclasses import dataclass
from typing import Optional


class ReportError(Exception):
    """Base class for every error raised by the report pipeline."""


class ValidationError(ReportError, ValueError):
    """Input or options violate a precondition. Always fatal."""


class StrategyError(ReportError):
    """A caller-supplied revenue or bonus strategy raised."""

    def __init__(self, message: str, seller_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.seller_id = seller_id


# ── non-fatal events (reported to the observer, never raised) ────────────────

@dataclass(frozen=True)
class SkippedRecord:
    receipt_id: Optional[str]
    seller_id: str

    def __str__(self) -> str:
        return f"receipt {self.receipt_id} references unknown seller '{self.seller_id}'"


@dataclass(frozen=True)
class SkippedLineItem:
    receipt_id: Optional[str]
    sku: str

    def __str__(self) -> str:
        return f"item '{self.sku}' in receipt {self.receipt_id} references unknown product"
