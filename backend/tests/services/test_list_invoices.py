"""List Invoices — verifies the data envelope and the AND-combined filters.

Invariants:
    - Always {"data": [...]}, empty list when nothing matches
    - status filter is an exact match
    - due_date_from / due_date_to are inclusive; date-only upper bound covers the day
    - Results ordered by id ascending
    - Unparsable bounds → 422 keyed by parameter name
"""

from datetime import datetime

import pytest


@pytest.fixture
async def seeded(make_invoice):
    return [
        await make_invoice(status="paid", due_date=datetime(2024, 4, 30, 23, 59, 59)),
        await make_invoice(status="paid", due_date=datetime(2024, 5, 1)),
        await make_invoice(status="sent", due_date=datetime(2024, 5, 15, 12, 0)),
        await make_invoice(status="paid", due_date=datetime(2024, 5, 31, 18, 30)),
        await make_invoice(status="overdue", due_date=datetime(2024, 6, 1)),
        await make_invoice(status="draft", due_date=None),
    ]


def _ids(res) -> list[int]:
    return [inv["id"] for inv in res.json()["data"]]


async def test_list_empty_returns_data_envelope(client):
    res = await client.get("/api/invoices")

    assert res.status_code == 200
    assert res.json() == {"data": []}


async def test_list_without_filters_returns_all_by_id(client, seeded):
    res = await client.get("/api/invoices")

    assert _ids(res) == sorted(inv.id for inv in seeded)


async def test_list_filters_by_exact_status(client, seeded):
    res = await client.get("/api/invoices", params={"status": "paid"})

    assert _ids(res) == [seeded[0].id, seeded[1].id, seeded[3].id]
    assert all(inv["status"] == "paid" for inv in res.json()["data"])


async def test_list_unknown_status_matches_nothing(client, seeded):
    res = await client.get("/api/invoices", params={"status": "PAID"})

    assert res.status_code == 200
    assert res.json() == {"data": []}


async def test_list_due_date_window_is_inclusive(client, seeded):
    res = await client.get("/api/invoices", params={
        "due_date_from": "2024-05-01", "due_date_to": "2024-05-31",
    })

    assert _ids(res) == [seeded[1].id, seeded[2].id, seeded[3].id]


async def test_list_lower_bound_only(client, seeded):
    res = await client.get("/api/invoices", params={
        "due_date_from": "2024-05-15T12:00:00",
    })

    assert _ids(res) == [seeded[2].id, seeded[3].id, seeded[4].id]


async def test_list_upper_bound_with_time_is_exact(client, seeded):
    res = await client.get("/api/invoices", params={
        "due_date_to": "2024-05-01T00:00:00",
    })

    assert _ids(res) == [seeded[0].id, seeded[1].id]


async def test_list_combines_status_and_window(client, seeded):
    res = await client.get("/api/invoices", params={
        "status": "paid",
        "due_date_from": "2024-05-01",
        "due_date_to": "2024-05-31",
    })

    assert _ids(res) == [seeded[1].id, seeded[3].id]


async def test_list_blank_parameters_are_ignored(client, seeded):
    res = await client.get("/api/invoices?status=&due_date_from=")

    assert len(res.json()["data"]) == len(seeded)


async def test_list_rejects_unparsable_bound(client, seeded):
    res = await client.get("/api/invoices", params={"due_date_from": "soon"})

    assert res.status_code == 422
    assert res.json()["errors"] == {
        "due_date_from": ["The due date from field must be a valid date."],
    }


async def test_date_only_upper_bound_includes_last_sub_second(client, make_invoice):
    last_moment = await make_invoice(
        status="paid", due_date=datetime(2024, 5, 31, 23, 59, 59, 500000),
    )
    await make_invoice(status="paid", due_date=datetime(2024, 6, 1))

    res = await client.get("/api/invoices", params={"due_date_to": "2024-05-31"})

    assert _ids(res) == [last_moment.id]
