from pydantic import BaseModel, Field
from datetime import date as Date
from decimal import Decimal
from typing import Optional


# ── Input models ─────────────────────────────────────────────────────────────

class Seller(BaseModel):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[Date] = None
    position: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Customer(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class Product(BaseModel):
    sku: str
    purchase_price: Decimal = Field(ge=0)  # unit cost
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[Decimal] = None  # list price, informational only


class PurchaseItem(BaseModel):
    sku: str
    quantity: int = Field(gt=0)
    sale_price: Decimal = Field(ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0, le=100)  # percent


class PurchaseRecord(BaseModel):
    receipt_id: Optional[str] = None
    seller_id: str
    customer_id: Optional[str] = None
    date: Optional[Date] = None
    total_amount: Decimal = Decimal("0")
    items: list[PurchaseItem]


class SalesData(BaseModel):
    customers: list[Customer] = []  # not used by the report itself
    products: list[Product]
    sellers: list[Seller]
    purchase_records: list[PurchaseRecord]


# ── Working state ────────────────────────────────────────────────────────────

class SellerStats(BaseModel):
    """Running totals for one seller while purchase records are folded in."""

    id: str
    name: str
    revenue: Decimal = Decimal("0.00")
    profit: Decimal = Decimal("0.00")
    sales_count: int = 0  # receipts, not items
    products_sold: dict[str, int] = Field(default_factory=dict)


# ── Response models ──────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: int


class ReportEntry(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    # rate or currency amount, whichever the bonus strategy returns
    bonus: Decimal


class ProcessingSummary(BaseModel):
    records_total: int = 0
    records_processed: int = 0
    records_skipped: int = 0
    items_processed: int = 0
    items_skipped: int = 0
    bonus_failures: int = 0


class SalesReport(BaseModel):
    entries: list[ReportEntry]
    summary: ProcessingSummary
