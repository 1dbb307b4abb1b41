"""
Deterministic demo-data generator.

Produces:
  - 5 sellers
  - 40 products  (SKU_001 .. SKU_040)
  - 30 customers
  - 200 purchase records, 1-4 items each, ~20 % discounted
  - 2 records from an unknown seller and 2 items with an unknown SKU,
    so the skip paths show up in the demo report
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from sales_report import config
from sales_report.models import Customer, Product, PurchaseItem, PurchaseRecord, Seller
from sales_report.store import DataStore

START = date(2026, 1, 1)
DAYS  = 90

_SELLERS = [
    ("seller_1", "Alexey", "Petrov"),
    ("seller_2", "Ekaterina", "Ivanova"),
    ("seller_3", "Dmitry", "Smirnov"),
    ("seller_4", "Olga", "Kuznetsova"),
    ("seller_5", "Ivan", "Popov"),
]


def _money(rng: random.Random, lo: float, hi: float) -> Decimal:
    return Decimal(str(round(rng.uniform(lo, hi), 2)))


def seed(store: DataStore, seed_value: int = config.SEED) -> None:
    rng = random.Random(seed_value)

    # ── sellers ──────────────────────────────────────────────────────────────
    for sid, first, last in _SELLERS:
        store.add_seller(Seller(
            id=sid,
            first_name=first,
            last_name=last,
            start_date=START - timedelta(days=rng.randint(100, 1000)),
            position="Sales associate",
        ))

    # ── products ─────────────────────────────────────────────────────────────
    categories = ["Electronics", "Home", "Toys", "Books"]
    for n in range(1, 41):
        purchase_price = _money(rng, 5, 300)
        store.add_product(Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n}",
            category=rng.choice(categories),
            purchase_price=purchase_price,
            sale_price=(purchase_price * Decimal("1.4")).quantize(Decimal("0.01")),
        ))

    # ── customers ────────────────────────────────────────────────────────────
    for n in range(1, 31):
        store.add_customer(Customer(id=f"customer_{n}", first_name=f"Customer {n}"))

    # ── purchase records ─────────────────────────────────────────────────────
    products = list(store.products.values())
    seller_ids = [sid for sid, _, _ in _SELLERS]

    for n in range(1, 201):
        items = []
        for product in rng.sample(products, rng.randint(1, 4)):
            markup = Decimal(str(round(rng.uniform(1.05, 1.6), 2)))
            items.append(PurchaseItem(
                sku=product.sku,
                quantity=rng.randint(1, 5),
                sale_price=(product.purchase_price * markup).quantize(Decimal("0.01")),
                discount=Decimal(rng.choice([5, 10, 15])) if rng.random() < 0.2 else Decimal("0"),
            ))
        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            seller_id=rng.choice(seller_ids),
            customer_id=f"customer_{rng.randint(1, 30)}",
            date=START + timedelta(days=rng.randint(0, DAYS - 1)),
            total_amount=sum((i.sale_price * i.quantity for i in items), Decimal("0")),
            items=items,
        ))

    # records the report has to skip
    for n in (201, 202):
        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            seller_id="seller_unknown",
            items=[PurchaseItem(sku="SKU_001", quantity=1, sale_price=Decimal("10"))],
        ))
    for n in (203, 204):
        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            seller_id=seller_ids[n % len(seller_ids)],
            items=[
                PurchaseItem(sku="SKU_999", quantity=1, sale_price=Decimal("10")),
                PurchaseItem(sku="SKU_002", quantity=1, sale_price=Decimal("50")),
            ],
        ))
