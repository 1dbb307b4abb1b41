"""
Pluggable revenue and bonus strategies, and the options object that carries
them into the pipeline.
"""

from decimal import Decimal
from typing import Any, Callable, Mapping, Protocol, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from sales_report import config
from sales_report.currency import round_money
from sales_report.errors import ValidationError
from sales_report.models import Product, PurchaseItem, SellerStats

_HUNDRED = Decimal("100")


class RevenueStrategy(Protocol):
    def __call__(self, item: PurchaseItem, product: Product) -> Decimal: ...


class BonusStrategy(Protocol):
    def __call__(self, index: int, total: int, seller: SellerStats) -> Decimal: ...


# ── Reference strategies ─────────────────────────────────────────────────────

def calculate_simple_revenue(item: PurchaseItem, product: Product) -> Decimal:
    """Line revenue after discount: sale_price * quantity * (1 - discount/100)."""
    multiplier = 1 - item.discount / _HUNDRED
    return round_money(item.sale_price * item.quantity * multiplier)


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Bonus rate by profit rank (0-based index among `total` sellers)."""
    # last place always gets nothing, even a sole seller or 2nd/3rd of three
    if index == total - 1:
        return Decimal("0")
    if index == 0:
        return Decimal("0.15")
    if index in (1, 2):
        return Decimal("0.10")
    return Decimal("0.05")


def calculate_bonus_amount_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Same schedule as calculate_bonus_by_profit, paid out as a share of profit."""
    rate = calculate_bonus_by_profit(index, total, seller)
    return round_money(max(seller.profit, Decimal("0")) * rate)


# ── Options ──────────────────────────────────────────────────────────────────

class ReportOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    calculate_revenue: Callable[..., Any] = Field(alias="calculateRevenue")
    calculate_bonus: Callable[..., Any] = Field(alias="calculateBonus")
    top_n: int = Field(default=config.TOP_PRODUCTS_LIMIT, gt=0, le=config.MAX_TOP_PRODUCTS)
    # False makes a failing bonus strategy abort the whole run
    isolate_bonus_errors: bool = True


DEFAULT_OPTIONS = ReportOptions(
    calculate_revenue=calculate_simple_revenue,
    calculate_bonus=calculate_bonus_by_profit,
)


def validate_options(options: Union[ReportOptions, Mapping[str, Any], None]) -> ReportOptions:
    if options is None:
        raise ValidationError("Report options are required")
    if isinstance(options, ReportOptions):
        return options
    if not isinstance(options, Mapping):
        raise ValidationError(f"Report options must be a mapping, got {type(options).__name__}")

    for name, alias in (("calculate_revenue", "calculateRevenue"), ("calculate_bonus", "calculateBonus")):
        if name not in options and alias not in options:
            raise ValidationError(f"Report options are missing the '{name}' strategy")
    try:
        return ReportOptions.model_validate(options)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid report options: {exc}") from exc
