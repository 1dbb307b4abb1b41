from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

_TWO_DP = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Coerce a strategy result (int, float, str or Decimal) to a finite Decimal."""
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise TypeError(f"Expected a number, got {value!r}") from exc
    if not result.is_finite():
        raise TypeError(f"Expected a finite number, got {value!r}")
    return result


def round_money(amount) -> Decimal:
    """Round to 2 dp, half away from zero."""
    return to_decimal(amount).quantize(_TWO_DP, rounding=ROUND_HALF_UP)
