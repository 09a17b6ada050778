"""Ticket Bookkeeping - verifies ticket numbering and the wallet summary."""

from datetime import date, datetime, timezone
from decimal import Decimal

from marketplace.core.pricing import EventPricing, compute_purchase
from marketplace.core.ticketing import issue_tickets, summarize_tickets

ISSUED_AT = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)


def _result(quantity=3):
    event = EventPricing(
        event_id="2", base_price=Decimal("45"), discount_table={"leadership_legend": 100},
    )
    return compute_purchase(event, quantity, ["leadership_legend"])


def test_issue_one_stub_per_seat_with_unique_numbers():
    stubs = issue_tickets(_result(3), ISSUED_AT, "a1b2c3d4")
    assert len(stubs) == 3
    assert len({s.ticket_number for s in stubs}) == 3
    assert len({s.qr_code for s in stubs}) == 3


def test_stub_numbering_format():
    stamp = int(ISSUED_AT.timestamp() * 1000)
    first = issue_tickets(_result(1), ISSUED_AT, "a1b2c3d4")[0]
    assert first.ticket_number == f"ANM-2025-{stamp}-a1b2c3d4-1"
    assert first.qr_code == f"ACAD-NFT-2-{stamp}-a1b2c3d4-1"


def test_same_instant_different_batches_never_collide():
    first = issue_tickets(_result(2), ISSUED_AT, "aaaa0001")
    second = issue_tickets(_result(2), ISSUED_AT, "bbbb0002")
    assert len({s.ticket_number for s in first + second}) == 4
    assert {s.qr_code for s in first}.isdisjoint({s.qr_code for s in second})


def test_stubs_carry_the_priced_result():
    stub = issue_tickets(_result(1), ISSUED_AT, "a1b2c3d4")[0]
    assert stub.price_paid == Decimal("0.00")
    assert stub.original_price == Decimal("45.00")
    assert stub.discount_percent == 100
    assert stub.credential_applied == "leadership_legend"
    assert stub.purchased_at == ISSUED_AT


def test_summary_counts_statuses_and_money():
    tickets = [
        {"status": "active", "price_paid": 60, "original_price": 75,
         "event_id": "1", "event_date": "2025-09-15"},
        {"status": "active", "price_paid": 25, "original_price": 45,
         "event_id": "2", "event_date": "2025-08-22"},
        {"status": "used", "price_paid": 25, "original_price": 25,
         "event_id": "3", "event_date": "2025-06-01"},
        {"status": "cancelled", "price_paid": 75, "original_price": 75,
         "event_id": "1", "event_date": "2025-09-15"},
    ]
    summary = summarize_tickets(tickets, today=date(2025, 7, 1))
    assert summary.total_tickets == 4
    assert summary.active_tickets == 2
    assert summary.used_tickets == 1
    assert summary.cancelled_tickets == 1
    assert summary.total_spent == Decimal("110.00")
    assert summary.total_saved == Decimal("35.00")
    assert summary.upcoming_events == 2


def test_upcoming_counts_distinct_future_events_only():
    tickets = [
        {"status": "active", "price_paid": 10, "original_price": 10,
         "event_id": "1", "event_date": date(2025, 9, 15)},
        {"status": "active", "price_paid": 10, "original_price": 10,
         "event_id": "1", "event_date": date(2025, 9, 15)},
        {"status": "active", "price_paid": 10, "original_price": 10,
         "event_id": "2", "event_date": date(2025, 1, 1)},
    ]
    summary = summarize_tickets(tickets, today=date(2025, 7, 1))
    assert summary.upcoming_events == 1


def test_empty_wallet():
    summary = summarize_tickets([], today=date(2025, 7, 1))
    assert summary.total_tickets == 0
    assert summary.total_spent == Decimal("0.00")
    assert summary.upcoming_events == 0
