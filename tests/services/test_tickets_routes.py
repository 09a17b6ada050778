"""Ticket Routes - verifies purchase rules, persistence and the wallet.

Invariants:
    - Demo purchases are priced and numbered but never written
    - Verified users pay with the credentials they actually hold
    - Quantity limit and capacity are enforced before anything is written
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from marketplace.core.domain_types import EventStatus
from marketplace.models.event import Event
from marketplace.models.ticket import Ticket


async def _ticket_count(db) -> int:
    return await db.scalar(select(func.count()).select_from(Ticket))


async def test_purchase_requires_authentication(client):
    res = await client.post("/api/v1/tickets/purchase", json={"eventId": "1", "quantity": 1})
    assert res.status_code == 401


async def test_demo_purchase_uses_fixture_credentials(client, demo_headers, test_db):
    res = await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "1", "quantity": 2},
        headers=demo_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["appliedCredential"] == "research_rockstar"
    assert body["totalPrice"] == 0.0
    assert body["totalSaved"] == 150.0
    assert body["persisted"] is False
    assert len(body["tickets"]) == 2
    assert body["tickets"][0]["ticketNumber"].startswith("ANM-")
    assert await _ticket_count(test_db) == 0


async def test_demo_purchase_honours_requested_credentials(client, demo_headers):
    body = (await client.post(
        "/api/v1/tickets/purchase",
        json={"eventId": "1", "quantity": 1, "heldCredentials": ["gpa_guardian"]},
        headers=demo_headers,
    )).json()
    assert body["unitPrice"] == 60.0
    assert body["discountPercent"] == 20


async def test_quantity_above_limit_is_rejected(client, demo_headers):
    res = await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "1", "quantity": 6},
        headers=demo_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "TICKET_LIMIT_EXCEEDED"


async def test_student_purchase_is_persisted(
    client, student, student_headers, add_portfolio, test_db,
):
    await add_portfolio(student.id, [("gpa_guardian", "Rare")])
    res = await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "1", "quantity": 2},
        headers=student_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["unitPrice"] == 60.0
    assert body["appliedCredential"] == "gpa_guardian"
    assert body["persisted"] is True
    assert {t["seat"] for t in body["tickets"]} == {"343", "344"}

    assert await _ticket_count(test_db) == 2
    event = (await test_db.execute(
        select(Event).where(Event.id == "1").execution_options(populate_existing=True),
    )).scalar_one()
    assert event.current_attendees == 344


async def test_student_cannot_claim_credentials_they_lack(client, student_headers):
    body = (await client.post(
        "/api/v1/tickets/purchase",
        json={"eventId": "1", "quantity": 1, "heldCredentials": ["research_rockstar"]},
        headers=student_headers,
    )).json()
    assert body["unitPrice"] == 75.0
    assert body["appliedCredential"] is None


async def test_sold_out_event(client, student_headers, test_db):
    test_db.add(Event(
        id="tiny", title="Seminar", description="", event_date=date(2026, 12, 1),
        location="Room 101", price=Decimal("5.00"), discount_table={}, tags=[],
        max_attendees=10, current_attendees=9,
    ))
    await test_db.commit()

    res = await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "tiny", "quantity": 2},
        headers=student_headers,
    )
    assert res.status_code == 409
    body = res.json()
    assert body["error"]["code"] == "SOLD_OUT"
    assert body["error"]["context"]["event_id"] == "tiny"
    assert await _ticket_count(test_db) == 0


async def test_cancelled_event_is_not_on_sale(client, student_headers, demo_headers, test_db):
    test_db.add(Event(
        id="gone", title="Postponed Colloquium", description="", event_date=date(2026, 12, 1),
        location="Hall B", price=Decimal("20.00"), discount_table={}, tags=[],
        max_attendees=50, current_attendees=0, status=EventStatus.CANCELLED.value,
    ))
    await test_db.commit()

    for headers in (student_headers, demo_headers):
        res = await client.post(
            "/api/v1/tickets/purchase", json={"eventId": "gone", "quantity": 1},
            headers=headers,
        )
        assert res.status_code == 409
        assert res.json()["error"]["code"] == "EVENT_NOT_ACTIVE"
    assert await _ticket_count(test_db) == 0

    listed = (await client.get("/api/v1/events")).json()
    assert "gone" not in {e["id"] for e in listed}


async def test_purchase_unknown_event(client, demo_headers):
    res = await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "nope", "quantity": 1},
        headers=demo_headers,
    )
    assert res.status_code == 404


async def test_demo_wallet_comes_from_fixture(client, demo_headers):
    res = await client.get("/api/v1/tickets/user", headers=demo_headers)
    assert res.status_code == 200
    body = res.json()
    assert [t["ticketNumber"] for t in body["tickets"]] == ["FUT2025-001", "SLS2025-002"]
    assert body["summary"]["totalTickets"] == 2
    assert body["summary"]["totalSpent"] == 85.0
    assert body["summary"]["totalSaved"] == 35.0


async def test_student_wallet_lists_purchases(
    client, student, student_headers, add_portfolio,
):
    await add_portfolio(student.id, [("leadership_legend", "Epic")])
    await client.post(
        "/api/v1/tickets/purchase", json={"eventId": "3", "quantity": 1},
        headers=student_headers,
    )
    body = (await client.get("/api/v1/tickets/user", headers=student_headers)).json()
    assert len(body["tickets"]) == 1
    ticket = body["tickets"][0]
    assert ticket["eventTitle"] == "Cross-University Networking Night"
    assert ticket["pricePaid"] == 15.0
    assert body["summary"]["activeTickets"] == 1
    assert body["summary"]["totalSaved"] == 10.0


async def test_empty_student_wallet(client, student_headers):
    body = (await client.get("/api/v1/tickets/user", headers=student_headers)).json()
    assert body["tickets"] == []
    assert body["summary"]["totalTickets"] == 0
