"""Ticket Pricing - verifies best-single-discount selection and price arithmetic.

Tests:
    - The highest held percent wins; discounts never stack
    - 100% yields a free ticket; totals are unit price x quantity
    - Ties resolve to the smallest tag regardless of input order
    - Contract violations raise InvalidArgumentError
"""

from decimal import Decimal

import pytest

from marketplace.core.errors import InvalidArgumentError
from marketplace.core.pricing import (
    EventPricing, compute_purchase, discounted_unit_price,
    select_best_discount, to_money,
)

TABLE = {"gpa_guardian": 20, "research_rockstar": 100, "leadership_legend": 30}


def _event(price="75", table=None) -> EventPricing:
    return EventPricing(
        event_id="1", base_price=Decimal(price),
        discount_table=TABLE if table is None else table,
    )


def test_full_discount_beats_smaller_ones():
    result = compute_purchase(_event(), 1, ["gpa_guardian", "research_rockstar", "leadership_legend"])
    assert result.applied_credential == "research_rockstar"
    assert result.discount_percent == 100
    assert result.unit_price == Decimal("0.00")
    assert result.total_price == Decimal("0.00")


def test_best_of_partial_discounts_applies_alone():
    result = compute_purchase(_event(), 1, ["gpa_guardian", "leadership_legend"])
    assert result.applied_credential == "leadership_legend"
    assert result.discount_percent == 30
    assert result.unit_price == Decimal("52.50")


def test_no_held_credentials_pays_base_price():
    result = compute_purchase(_event(), 3, [])
    assert result.applied_credential is None
    assert result.discount_percent == 0
    assert result.unit_price == Decimal("75.00")
    assert result.total_price == Decimal("225.00")


def test_unknown_credentials_are_ignored():
    result = compute_purchase(_event(), 1, ["chess_champion"])
    assert result.applied_credential is None
    assert result.unit_price == Decimal("75.00")


def test_total_is_unit_times_quantity():
    result = compute_purchase(_event("45"), 4, ["gpa_guardian"])
    assert result.unit_price == Decimal("36.00")
    assert result.total_price == Decimal("144.00")
    assert result.total_saved == Decimal("36.00")


def test_zero_percent_credential_is_not_reported_as_applied():
    result = compute_purchase(_event(table={"freebie": 0}), 1, ["freebie"])
    assert result.applied_credential is None
    assert result.discount_percent == 0


def test_tie_resolves_to_smallest_tag_in_any_order():
    table = {"beta": 25, "alpha": 25, "gamma": 10}
    forward = select_best_discount(table, ["beta", "alpha", "gamma"])
    backward = select_best_discount(table, ["gamma", "alpha", "beta"])
    assert forward.credential == backward.credential == "alpha"
    assert forward.percent == 25


def test_duplicate_held_tags_do_not_stack():
    result = compute_purchase(_event(), 1, ["gpa_guardian", "gpa_guardian"])
    assert result.discount_percent == 20
    assert result.unit_price == Decimal("60.00")


def test_free_event_stays_free():
    result = compute_purchase(_event("0"), 2, ["gpa_guardian"])
    assert result.unit_price == Decimal("0.00")
    assert result.total_price == Decimal("0.00")


@pytest.mark.parametrize("percent", [0, 1, 13, 33, 50, 99, 100])
def test_unit_price_stays_within_bounds(percent):
    base = Decimal("19.99")
    unit = discounted_unit_price(base, percent)
    assert Decimal("0.00") <= unit <= base


def test_rounding_is_half_up_to_cents():
    assert discounted_unit_price(Decimal("0.05"), 50) == Decimal("0.03")


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
def test_rejects_invalid_quantity(quantity):
    with pytest.raises(InvalidArgumentError) as exc:
        compute_purchase(_event(), quantity, [])
    assert exc.value.http_status == 400


def test_rejects_negative_base_price():
    with pytest.raises(InvalidArgumentError):
        compute_purchase(_event("-1"), 1, [])


@pytest.mark.parametrize("table", [
    {"gpa_guardian": 101},
    {"gpa_guardian": -5},
    {"gpa_guardian": 12.5},
    {"": 10},
])
def test_rejects_malformed_discount_table(table):
    with pytest.raises(InvalidArgumentError):
        compute_purchase(_event(table=table), 1, ["gpa_guardian"])


def test_to_money_accepts_numbers_and_strings():
    assert to_money(75) == Decimal("75.00")
    assert to_money(52.5) == Decimal("52.50")
    assert to_money("19.999") == Decimal("20.00")


@pytest.mark.parametrize("value", [True, "abc", float("nan"), float("inf")])
def test_to_money_rejects_non_numbers(value):
    with pytest.raises(InvalidArgumentError):
        to_money(value)
