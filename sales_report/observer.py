import logging
from typing import Protocol

from sales_report.errors import SkippedLineItem, SkippedRecord

logger = logging.getLogger(__name__)


class ReportObserver(Protocol):
    """Sink for the non-fatal conditions met while building a report."""

    def record_skipped(self, event: SkippedRecord) -> None: ...

    def item_skipped(self, event: SkippedLineItem) -> None: ...

    def bonus_failed(self, seller_id: str, error: Exception) -> None: ...


class LoggingObserver:
    def record_skipped(self, event: SkippedRecord) -> None:
        logger.warning("Skipped %s", event)

    def item_skipped(self, event: SkippedLineItem) -> None:
        logger.warning("Skipped %s", event)

    def bonus_failed(self, seller_id: str, error: Exception) -> None:
        logger.error("Bonus calculation failed for seller %s: %s", seller_id, error)


class CollectingObserver(LoggingObserver):
    """Logs like LoggingObserver and also keeps every event."""

    def __init__(self) -> None:
        self.skipped_records: list[SkippedRecord] = []
        self.skipped_items: list[SkippedLineItem] = []
        self.bonus_failures: dict[str, Exception] = {}

    def record_skipped(self, event: SkippedRecord) -> None:
        super().record_skipped(event)
        self.skipped_records.append(event)

    def item_skipped(self, event: SkippedLineItem) -> None:
        super().item_skipped(event)
        self.skipped_items.append(event)

    def bonus_failed(self, seller_id: str, error: Exception) -> None:
        super().bonus_failed(seller_id, error)
        self.bonus_failures[seller_id] = error
