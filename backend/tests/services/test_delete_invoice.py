"""Delete Invoice — verifies hard delete, confirmation body, and not-found paths.

Invariants:
    - DELETE returns 200 with confirmation message and the deleted id
    - A deleted invoice is gone: subsequent GET and DELETE both 404
    - Ids outside the id column range are simply not found
    - Join rows in invoice_tag are removed with the invoice; tags survive
"""

from sqlalchemy import func, select

from invoice_api.models.invoice_tag import invoice_tag
from invoice_api.models.tag import Tag


async def test_delete_returns_confirmation(client, make_invoice):
    invoice = await make_invoice()

    res = await client.delete(f"/api/invoices/{invoice.id}")

    assert res.status_code == 200
    assert res.json() == {
        "message": "Invoice deleted successfully", "id": invoice.id,
    }


async def test_deleted_invoice_is_no_longer_found(client, make_invoice):
    invoice = await make_invoice()

    await client.delete(f"/api/invoices/{invoice.id}")
    res = await client.get(f"/api/invoices/{invoice.id}")

    assert res.status_code == 404


async def test_delete_twice_returns_404(client, make_invoice):
    invoice = await make_invoice()

    await client.delete(f"/api/invoices/{invoice.id}")
    res = await client.delete(f"/api/invoices/{invoice.id}")

    assert res.status_code == 404
    assert "not found" in res.json()["message"]


async def test_delete_nonexistent_invoice_returns_404(client):
    res = await client.delete("/api/invoices/999")

    assert res.status_code == 404


async def test_delete_id_beyond_column_range_returns_404(client):
    res = await client.delete("/api/invoices/9223372036854775808")

    assert res.status_code == 404
    assert res.json() == {"message": "Invoice '9223372036854775808' not found"}


async def test_delete_leaves_other_invoices(client, make_invoice):
    keep = await make_invoice()
    drop = await make_invoice()

    await client.delete(f"/api/invoices/{drop.id}")
    res = await client.get("/api/invoices")

    assert [inv["id"] for inv in res.json()["data"]] == [keep.id]


async def test_delete_removes_join_rows_but_keeps_tags(client, test_db, make_invoice):
    tag = Tag(name="recurring")
    test_db.add(tag)
    await test_db.commit()
    invoice = await make_invoice(tags=[tag])

    res = await client.delete(f"/api/invoices/{invoice.id}")
    assert res.status_code == 200

    links = await test_db.scalar(
        select(func.count()).select_from(invoice_tag),
    )
    assert links == 0
    remaining = await test_db.execute(select(Tag.id).where(Tag.id == tag.id))
    assert remaining.scalar_one_or_none() == tag.id
