import logging
import re
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

import pydantic

from sales_report import config
from sales_report.currency import round_money, to_decimal
from sales_report.errors import (
    SkippedLineItem,
    SkippedRecord,
    StrategyError,
    ValidationError,
)
from sales_report.indexes import build_indexes
from sales_report.models import (
    ProcessingSummary,
    Product,
    PurchaseRecord,
    ReportEntry,
    SalesData,
    SalesReport,
    SellerStats,
    TopProduct,
)
from sales_report.observer import LoggingObserver, ReportObserver
from sales_report.strategies import (
    BonusStrategy,
    ReportOptions,
    RevenueStrategy,
    validate_options,
)

logger = logging.getLogger(__name__)

_SKU_SUFFIX = re.compile(r"^(.*?)(\d+)$")


def _sku_sort_key(sku: str) -> tuple:
    # "SKU_12" sorts before "SKU_100": compare the trailing number as a number
    match = _SKU_SUFFIX.match(sku)
    if match is None:
        return (sku, -1, sku)
    return (match.group(1), int(match.group(2)), sku)


def top_products(products_sold: Mapping[str, int], limit: int = config.TOP_PRODUCTS_LIMIT) -> list[TopProduct]:
    ranked = sorted(
        products_sold.items(),
        key=lambda kv: _sku_sort_key(kv[0]),
    )
    # stable second sort: quantity desc, SKU order kept among equals
    ranked.sort(key=lambda kv: kv[1], reverse=True)
    limit = min(limit, config.MAX_TOP_PRODUCTS)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def validate_sales_data(data: Union[SalesData, Mapping[str, Any], None]) -> SalesData:
    if data is None:
        raise ValidationError("Sales data is required")
    if not isinstance(data, SalesData):
        if not isinstance(data, Mapping):
            raise ValidationError(f"Sales data must be a mapping, got {type(data).__name__}")
        try:
            data = SalesData.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Malformed sales data: {exc}") from exc

    for name in ("purchase_records", "products", "sellers"):
        if not getattr(data, name):
            raise ValidationError(f"Sales data must contain a non-empty '{name}' collection")
    return data


def aggregate_sales(
    purchase_records: Iterable[PurchaseRecord],
    seller_index: dict[str, SellerStats],
    product_index: dict[str, Product],
    calculate_revenue: RevenueStrategy,
    observer: Optional[ReportObserver] = None,
) -> ProcessingSummary:
    """
    Fold purchase records into the seller accumulators in ``seller_index``.

    Records with an unknown seller are skipped whole; items with an unknown
    SKU are skipped individually. Raises StrategyError if the revenue strategy
    fails and ValidationError if no item at all could be processed.
    """
    observer = observer or LoggingObserver()
    summary = ProcessingSummary()

    for record in purchase_records:
        summary.records_total += 1
        seller = seller_index.get(record.seller_id)
        if seller is None:
            summary.records_skipped += 1
            observer.record_skipped(SkippedRecord(record.receipt_id, record.seller_id))
            continue

        # receipts are counted even when none of their items resolve
        seller.sales_count += 1
        summary.records_processed += 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                summary.items_skipped += 1
                observer.item_skipped(SkippedLineItem(record.receipt_id, item.sku))
                continue

            cost = product.purchase_price * item.quantity
            try:
                item_revenue = to_decimal(calculate_revenue(item, product))
            except Exception as exc:
                raise StrategyError(
                    f"Revenue strategy failed for item '{item.sku}' "
                    f"in receipt {record.receipt_id}: {exc}",
                    seller_id=seller.id,
                ) from exc

            seller.revenue += item_revenue
            seller.profit += item_revenue - cost
            seller.products_sold[item.sku] = seller.products_sold.get(item.sku, 0) + item.quantity
            summary.items_processed += 1

    if summary.items_processed == 0:
        raise ValidationError("No valid purchase items to analyse")

    for seller in seller_index.values():
        seller.revenue = round_money(seller.revenue)
        seller.profit = round_money(seller.profit)

    logger.info(
        "Aggregated %d/%d receipts, %d items (%d receipts and %d items skipped)",
        summary.records_processed,
        summary.records_total,
        summary.items_processed,
        summary.records_skipped,
        summary.items_skipped,
    )
    return summary


def rank_sellers(
    sellers: Iterable[SellerStats],
    calculate_bonus: BonusStrategy,
    top_n: int = config.TOP_PRODUCTS_LIMIT,
    active_only: bool = True,
    isolate_bonus_errors: bool = True,
    observer: Optional[ReportObserver] = None,
    summary: Optional[ProcessingSummary] = None,
) -> list[ReportEntry]:
    """Sort sellers by profit (desc), assign bonuses and top products."""
    observer = observer or LoggingObserver()

    ranked = [s for s in sellers if s.sales_count > 0 or not active_only]
    if not ranked:
        raise ValidationError("No sellers with sales to rank")

    # sorted() is stable: input order decides among equal profits
    ranked = sorted(ranked, key=lambda s: s.profit, reverse=True)
    total = len(ranked)

    entries: list[ReportEntry] = []
    for index, seller in enumerate(ranked):
        try:
            bonus = to_decimal(calculate_bonus(index, total, seller))
            best = top_products(seller.products_sold, top_n)
        except Exception as exc:
            if not isolate_bonus_errors:
                raise StrategyError(
                    f"Bonus strategy failed for seller '{seller.id}': {exc}",
                    seller_id=seller.id,
                ) from exc
            observer.bonus_failed(seller.id, exc)
            if summary is not None:
                summary.bonus_failures += 1
            bonus, best = Decimal("0"), []

        entries.append(ReportEntry(
            seller_id=seller.id,
            name=seller.name,
            revenue=round_money(seller.revenue),
            profit=round_money(seller.profit),
            sales_count=seller.sales_count,
            top_products=best,
            bonus=bonus,
        ))

    return entries


def build_report(
    data: Union[SalesData, Mapping[str, Any]],
    options: Union[ReportOptions, Mapping[str, Any]],
    observer: Optional[ReportObserver] = None,
) -> SalesReport:
    # ── 1. Preconditions: everything fatal fails before any aggregation ──────
    data = validate_sales_data(data)
    options = validate_options(options)
    observer = observer or LoggingObserver()

    # ── 2. Indexes ───────────────────────────────────────────────────────────
    seller_index, product_index = build_indexes(data.sellers, data.products)

    # ── 3. Aggregate ─────────────────────────────────────────────────────────
    summary = aggregate_sales(
        data.purchase_records,
        seller_index,
        product_index,
        options.calculate_revenue,
        observer,
    )

    # ── 4. Rank ──────────────────────────────────────────────────────────────
    entries = rank_sellers(
        seller_index.values(),
        options.calculate_bonus,
        top_n=options.top_n,
        isolate_bonus_errors=options.isolate_bonus_errors,
        observer=observer,
        summary=summary,
    )
    return SalesReport(entries=entries, summary=summary)


def analyze_sales_data(
    data: Union[SalesData, Mapping[str, Any]],
    options: Union[ReportOptions, Mapping[str, Any]],
    observer: Optional[ReportObserver] = None,
) -> list[ReportEntry]:
    """Ranked per-seller report, best profit first."""
    return build_report(data, options, observer).entries
