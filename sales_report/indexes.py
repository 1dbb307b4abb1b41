from typing import Any, Iterable, Union

import pydantic

from sales_report.errors import ValidationError
from sales_report.models import Product, Seller, SellerStats


def _validate_all(model, rows: Iterable[Any], label: str) -> list:
    items = []
    for pos, row in enumerate(rows):
        try:
            items.append(model.model_validate(row))
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Malformed {label} at position {pos}: {exc}") from exc
    return items


def build_indexes(
    sellers: Iterable[Union[Seller, dict]],
    products: Iterable[Union[Product, dict]],
) -> tuple[dict[str, SellerStats], dict[str, Product]]:
    """
    Return (seller_id -> zeroed SellerStats, sku -> Product).

    Both inputs may hold models or plain dicts. Seller order is preserved,
    which is what keeps the ranking stable on equal profit.
    """
    sellers = _validate_all(Seller, sellers or [], "seller")
    products = _validate_all(Product, products or [], "product")
    if not sellers:
        raise ValidationError("Seller list must not be empty")
    if not products:
        raise ValidationError("Product list must not be empty")

    seller_index: dict[str, SellerStats] = {}
    for s in sellers:
        if s.id in seller_index:
            raise ValidationError(f"Duplicate seller id '{s.id}'")
        seller_index[s.id] = SellerStats(id=s.id, name=s.name)

    product_index: dict[str, Product] = {}
    for p in products:
        if p.sku in product_index:
            raise ValidationError(f"Duplicate product sku '{p.sku}'")
        product_index[p.sku] = p

    return seller_index, product_index
