# billing/services/pricing/money.py
"""
Integer money arithmetic.

All amounts are ints in the smallest whole currency unit. Intermediate
products are computed with Decimal and rounded half-up, so 0.5 always rounds
away from zero for the non-negative values used here.
"""

from decimal import ROUND_HALF_UP, Decimal

from billing.models.choices import DiscountType

HUNDRED = Decimal("100")


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest whole unit, halves upward."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def apply_percentage_discount(
    base: int, percentage: Decimal | int | str, cap: int | None = None
) -> int:
    """
    Discount for ``percentage`` percent of ``base``.

    The result is capped by ``cap`` when given and never exceeds ``base``.
    """
    if base <= 0:
        return 0
    amount = round_half_up(Decimal(base) * Decimal(str(percentage)) / HUNDRED)
    if cap is not None:
        amount = min(amount, cap)
    return max(0, min(amount, base))


def apply_fixed_discount(base: int, fixed: Decimal | int | str) -> int:
    """A fixed discount never exceeds the amount it discounts."""
    if base <= 0:
        return 0
    amount = round_half_up(Decimal(str(fixed)))
    return max(0, min(amount, base))


def compute_discount(
    base: int,
    discount_type: str,
    value: Decimal | int | str,
    cap: int | None = None,
) -> int:
    """Dispatch to the percentage or fixed discount rule."""
    if discount_type == DiscountType.PERCENTAGE.value:
        return apply_percentage_discount(base, value, cap)
    if discount_type == DiscountType.FIXED.value:
        return apply_fixed_discount(base, value)
    raise ValueError(f"Unknown discount type: {discount_type}")


def compute_tax(base_after_discount: int, rate_percent: Decimal | int | str) -> int:
    """Tax on the discounted base, ``rate_percent`` given as e.g. 11 for 11%."""
    if base_after_discount <= 0:
        return 0
    return round_half_up(
        Decimal(base_after_discount) * Decimal(str(rate_percent)) / HUNDRED
    )


def compute_total(base_after_discount: int, tax: int, settlement_code: int) -> int:
    return max(0, base_after_discount) + tax + settlement_code


def prorate(monthly_rate: int, days: int, period_days: int = 30) -> int:
    """Price for ``days`` out of a ``period_days`` billing period."""
    return round_half_up(Decimal(monthly_rate) * Decimal(days) / Decimal(period_days))
