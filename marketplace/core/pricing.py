"""Ticket Pricing - best-credential discount selection and purchase totals.

Invariants:
    - Pure: no IO, no clock, no randomness; same inputs always give the same result
    - 0 <= unit_price <= base_price; a 100% discount yields unit_price == 0
    - total_price == unit_price * quantity
    - Exactly one credential (or none) is applied per purchase: discounts never stack
    - A held tag that maps to 0% is never reported as the applied credential

Design Decisions:
    - Decimal money rounded half-up to cents; floats only at the JSON boundary
    - Ties on the best percent resolve to the lexicographically smallest tag, so the
      result does not depend on the order the caller listed its credentials
    - Contract violations raise InvalidArgumentError instead of being clamped
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from marketplace.core.domain_types import MAX_DISCOUNT_PERCENT
from marketplace.core.errors import InvalidArgumentError

CENT = Decimal("0.01")
_HUNDRED = Decimal(100)


@dataclass(frozen=True)
class EventPricing:
    """The slice of an event the calculator needs."""
    event_id: str
    base_price: Decimal
    discount_table: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DiscountSelection:
    credential: str | None
    percent: int


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of pricing `quantity` tickets for one event."""
    event_id: str
    quantity: int
    base_price: Decimal
    unit_price: Decimal
    total_price: Decimal
    discount_percent: int
    applied_credential: str | None

    @property
    def unit_discount(self) -> Decimal:
        return self.base_price - self.unit_price

    @property
    def total_saved(self) -> Decimal:
        return self.unit_discount * self.quantity


def to_money(value: object, field_name: str = "price") -> Decimal:
    """Coerce int/float/str/Decimal to a cent-rounded Decimal."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field_name} must be a number", field_name)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentError(f"{field_name} must be a number", field_name)
    if not amount.is_finite():
        raise InvalidArgumentError(f"{field_name} must be finite", field_name)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_discount_table(table: Mapping[str, int]) -> None:
    """Reject empty tags and percents that are not integers in 0..100."""
    if not isinstance(table, Mapping):
        raise InvalidArgumentError("discount table must be a mapping", "discount_table")
    for tag, percent in table.items():
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidArgumentError(
                "discount table tags must be non-empty strings", "discount_table",
            )
        if isinstance(percent, bool) or not isinstance(percent, int):
            raise InvalidArgumentError(
                f"discount for '{tag}' must be an integer percent", "discount_table",
            )
        if not 0 <= percent <= MAX_DISCOUNT_PERCENT:
            raise InvalidArgumentError(
                f"discount for '{tag}' must be within 0..100 (got {percent})",
                "discount_table",
            )


def select_best_discount(
    table: Mapping[str, int], held_credentials: Iterable[str],
) -> DiscountSelection:
    """Pick the held credential with the strictly greatest percent."""
    best_tag: str | None = None
    best_percent = 0
    for tag in sorted(set(held_credentials)):
        percent = table.get(tag)
        if percent is not None and percent > best_percent:
            best_tag, best_percent = tag, percent
    return DiscountSelection(credential=best_tag, percent=best_percent)


def discounted_unit_price(base_price: Decimal, percent: int) -> Decimal:
    """base * (1 - percent/100), with 100% short-circuiting to exactly zero."""
    if percent >= MAX_DISCOUNT_PERCENT:
        return Decimal("0.00")
    unit = base_price * (_HUNDRED - percent) / _HUNDRED
    return unit.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_purchase(
    event: EventPricing, quantity: int, held_credentials: Iterable[str],
) -> PurchaseResult:
    """Price `quantity` tickets for `event` given the caller's credential tags."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidArgumentError("quantity must be a positive integer", "quantity")
    base_price = to_money(event.base_price, "base_price")
    if base_price < 0:
        raise InvalidArgumentError("base price cannot be negative", "base_price")
    validate_discount_table(event.discount_table)

    selection = select_best_discount(event.discount_table, held_credentials)
    unit_price = discounted_unit_price(base_price, selection.percent)
    return PurchaseResult(
        event_id=event.event_id,
        quantity=quantity,
        base_price=base_price,
        unit_price=unit_price,
        total_price=unit_price * quantity,
        discount_percent=selection.percent,
        applied_credential=selection.credential,
    )
