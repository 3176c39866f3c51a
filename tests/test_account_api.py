from sqlalchemy import func, select

from lotto_pro.models import DailyReport, ScannedTicket, Store, StoreLotteryInventory, StoreOwner
from lotto_pro.repositories.store_repository import StoreRepository
from tests.conftest import make_headers


def _count(session_factory, model, **filters):
    with session_factory() as session:
        stmt = select(func.count()).select_from(model).filter_by(**filters)
        return session.scalar(stmt)


def _sell_some(scan, seed, other_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-011")
    scan(
        headers=other_headers,
        store_id=seed.other_store_id,
        barcode_data="045-000999-001",
        direction="asc",
    )
    scan(headers=other_headers, store_id=seed.other_store_id, barcode_data="045-000999-005")


def test_delete_account_removes_owner_data(client, scan, seed, owner_headers, session_factory):
    other_headers = make_headers(seed.other_owner_id)
    _sell_some(scan, seed, other_headers)

    resp = client.delete("/auth/account", headers=owner_headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["deleted"] == {
        "daily_report": 1,
        "store_lottery_inventory": 1,
        "scanned_tickets": 2,
        "stores": 1,
    }
    assert _count(session_factory, StoreOwner, owner_id=seed.owner_id) == 0
    assert _count(session_factory, Store, store_id=seed.store_id) == 0
    assert _count(session_factory, StoreLotteryInventory, store_id=seed.store_id) == 0
    assert _count(session_factory, ScannedTicket, store_id=seed.store_id) == 0
    assert _count(session_factory, DailyReport, store_id=seed.store_id) == 0

    # The other owner's data is untouched.
    assert _count(session_factory, Store, store_id=seed.other_store_id) == 1
    assert _count(session_factory, StoreLotteryInventory, store_id=seed.other_store_id) == 1
    assert _count(session_factory, ScannedTicket, store_id=seed.other_store_id) == 2
    assert _count(session_factory, DailyReport, store_id=seed.other_store_id) == 1


def test_delete_account_is_all_or_nothing(client, scan, seed, owner_headers, session_factory, monkeypatch):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-011")

    original = StoreRepository.delete_owner_cascade

    def fail_after_deletes(self, session, owner_id):
        original(self, session, owner_id)
        raise RuntimeError("connection lost")

    monkeypatch.setattr(StoreRepository, "delete_owner_cascade", fail_after_deletes)
    resp = client.delete("/auth/account", headers=owner_headers)

    assert resp.status_code == 500
    assert resp.get_json()["code"] == "internal_error"
    assert _count(session_factory, StoreOwner, owner_id=seed.owner_id) == 1
    assert _count(session_factory, Store, store_id=seed.store_id) == 1
    assert _count(session_factory, StoreLotteryInventory, store_id=seed.store_id) == 1
    assert _count(session_factory, ScannedTicket, store_id=seed.store_id) == 2
    assert _count(session_factory, DailyReport, store_id=seed.store_id) == 1


def test_store_account_cannot_delete_owner(client, clerk_headers, seed, session_factory):
    resp = client.delete("/auth/account", headers=clerk_headers)

    assert resp.status_code == 403
    assert _count(session_factory, StoreOwner, owner_id=seed.owner_id) == 1


def test_delete_account_requires_token(client):
    assert client.delete("/auth/account").status_code == 401
