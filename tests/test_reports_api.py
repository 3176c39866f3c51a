from datetime import date, timedelta
from decimal import Decimal

import pytest

from lotto_pro.models import DailyReport, ScannedTicket, StoreLotteryInventory
from lotto_pro.models.enums import BookStatus, Direction
from lotto_pro.services.report_service import month_window, resolve_window
from lotto_pro.errors import ValidationError


@pytest.fixture
def history(session_factory, seed):
    """Two books with sales spread over several days."""

    today = date.today()
    with session_factory() as session:
        books = [
            StoreLotteryInventory(
                store_id=seed.store_id,
                lottery_id=seed.lottery_id,
                serial_number=serial,
                total_count=100,
                current_count=40,
                direction=Direction.ASC,
                status=BookStatus.ACTIVE,
            )
            for serial in ("000111", "000222")
        ]
        session.add_all(books)
        session.flush()

        scan_log = ScannedTicket(
            store_id=seed.store_id,
            barcode_data="045-000111-040",
            lottery_id=seed.lottery_id,
            ticket_number=40,
            scanned_by=seed.owner_id,
        )
        session.add(scan_log)
        session.flush()

        for book, day, sold in [
            (books[0], today, 10),
            (books[1], today, 4),
            (books[0], today - timedelta(days=3), 6),
            (books[0], today - timedelta(days=40), 20),
        ]:
            session.add(
                DailyReport(
                    store_id=seed.store_id,
                    lottery_id=seed.lottery_id,
                    book_id=book.id,
                    scan_id=scan_log.id,
                    report_date=day,
                    tickets_sold=sold,
                    total_sales=Decimal(sold) * Decimal("5.00"),
                )
            )
        session.commit()
    return today


def test_daily_report_defaults_to_today(client, seed, owner_headers, history):
    resp = client.get(f"/reports/store/{seed.store_id}/daily", headers=owner_headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["date"] == history.isoformat()
    assert body["total_tickets_sold"] == 14
    assert body["total_revenue"] == "70.00"
    assert {(row["serial_number"], row["tickets_sold"]) for row in body["breakdown"]} == {
        ("000111", 10),
        ("000222", 4),
    }


def test_daily_report_for_explicit_date(client, seed, owner_headers, history):
    day = (history - timedelta(days=3)).isoformat()
    body = client.get(f"/reports/store/{seed.store_id}/daily?date={day}", headers=owner_headers).get_json()

    assert body["total_tickets_sold"] == 6
    assert body["breakdown"][0]["total_sales"] == "30.00"


def test_daily_report_last7_groups_by_book(client, seed, owner_headers, history):
    body = client.get(f"/reports/store/{seed.store_id}/daily?range=last7", headers=owner_headers).get_json()

    assert body["start_date"] == (history - timedelta(days=6)).isoformat()
    assert body["total_tickets_sold"] == 20
    by_serial = {row["serial_number"]: row for row in body["breakdown"]}
    assert by_serial["000111"]["tickets_sold"] == 16
    assert "date" not in body


def test_daily_report_custom_range(client, seed, owner_headers, history):
    start = (history - timedelta(days=60)).isoformat()
    end = history.isoformat()
    body = client.get(
        f"/reports/store/{seed.store_id}/daily?range=custom&start_date={start}&end_date={end}",
        headers=owner_headers,
    ).get_json()

    assert body["total_tickets_sold"] == 40
    assert body["total_revenue"] == "200.00"


@pytest.mark.parametrize(
    "query",
    [
        "date=2024-13-01",
        "range=yesterday",
        "range=custom&start_date=2024-01-01",
        "range=custom&start_date=2024-02-01&end_date=2024-01-01",
    ],
)
def test_daily_report_rejects_bad_query(client, seed, owner_headers, query):
    resp = client.get(f"/reports/store/{seed.store_id}/daily?{query}", headers=owner_headers)
    assert resp.status_code == 400


def test_monthly_report(client, seed, owner_headers, history):
    month = history.strftime("%Y-%m")
    body = client.get(f"/reports/store/{seed.store_id}/monthly?month={month}", headers=owner_headers).get_json()

    in_month = 14 + (6 if (history - timedelta(days=3)).month == history.month else 0)
    assert body["month"] == month
    assert body["total_tickets_sold"] == in_month
    assert body["lottery_totals"][0]["lottery_number"] == "045"
    assert body["lottery_totals"][0]["tickets_sold"] == in_month
    assert body["daily_totals"][-1] == {"report_date": history.isoformat(), "tickets_sold": 14, "revenue": "70.00"}


def test_monthly_report_rejects_bad_month(client, seed, owner_headers):
    resp = client.get(f"/reports/store/{seed.store_id}/monthly?month=2024-1", headers=owner_headers)
    assert resp.status_code == 400


def test_reports_check_store_access(client, seed, owner_headers):
    resp = client.get(f"/reports/store/{seed.other_store_id}/monthly", headers=owner_headers)
    assert resp.status_code == 404


def test_scan_logs_filter_and_limit(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-002")

    all_logs = client.get(f"/reports/store/{seed.store_id}/scan-logs?limit=0", headers=owner_headers).get_json()
    assert len(all_logs["scan_logs"]) == 1

    old = client.get(f"/reports/store/{seed.store_id}/scan-logs?date=2000-01-01", headers=owner_headers).get_json()
    assert old["scan_logs"] == []


def test_store_inventory_listing(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-031")
    scan(lottery_number="050", ticket_serial="555555", ticket_number=30, direction="desc")

    body = client.get(f"/lottery/store/{seed.store_id}/inventory", headers=owner_headers).get_json()

    by_serial = {book["serial_number"]: book for book in body["inventory"]}
    assert by_serial["000123"]["remaining_tickets"] == 70
    assert by_serial["000123"]["direction"] == "asc"
    assert by_serial["555555"]["remaining_tickets"] == 30
    assert by_serial["555555"]["lottery_name"] == "Gold Rush"


def test_resolve_window():
    today = date(2024, 5, 17)

    assert resolve_window(today=today) == resolve_window(today=today, range_name="today")
    assert resolve_window(today=today, range_name="last7").start == date(2024, 5, 11)
    assert resolve_window(today=today, range_name="this_month").start == date(2024, 5, 1)
    assert resolve_window(today=today, on_date=date(2024, 1, 2), range_name="last7").start == date(2024, 1, 2)
    with pytest.raises(ValidationError):
        resolve_window(today=today, range_name="custom", start_date=date(2024, 5, 1))


def test_month_window_handles_leap_years():
    window = month_window("2024-02")
    assert (window.start, window.end) == (date(2024, 2, 1), date(2024, 2, 29))


def test_lottery_detail_lists_books_of_one_game(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-021")
    scan(barcode_data="045-000456-010", direction="asc")
    scan(lottery_number="050", ticket_serial="555555", ticket_number=30, direction="desc")

    resp = client.get(f"/lottery/store/{seed.store_id}/lottery/{seed.lottery_id}", headers=owner_headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["lottery"]["lottery_number"] == "045"
    assert body["lottery"]["total_tickets"] == 100
    by_serial = {book["serial_number"]: book["remaining_tickets"] for book in body["books"]}
    assert by_serial == {"000123": 80, "000456": 91}


def test_lottery_detail_not_found(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")

    missing = client.get(f"/lottery/store/{seed.store_id}/lottery/9999", headers=owner_headers)
    foreign = client.get(f"/lottery/store/{seed.other_store_id}/lottery/{seed.lottery_id}", headers=owner_headers)

    assert missing.status_code == 404
    assert missing.get_json()["error"] == "Lottery inventory not found"
    assert foreign.status_code == 404


def test_store_report_summary(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-031")
    scan(lottery_number="050", ticket_serial="555555", ticket_number=30, direction="desc")
    scan(lottery_number="050", ticket_serial="555555", ticket_number=24)

    resp = client.get(f"/reports/store/{seed.store_id}", headers=owner_headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["store"] == {"store_id": seed.store_id, "store_name": "Corner Mart", "state": "NJ"}
    assert body["summary"] == {
        "total_books": 2,
        "total_tickets": 130,
        "sold_tickets": 36,
        "remaining_tickets": 94,
        "total_revenue": "210.00",
    }
    assert [(g["lottery_number"], g["tickets_sold"], g["revenue"]) for g in body["revenue_by_lottery"]] == [
        ("045", 30, "150.00"),
        ("050", 6, "60.00"),
    ]
    assert len(body["recent_scans"]) == 4
    assert body["recent_scans"][0]["ticket_number"] == 24
    assert body["sales_by_date"] == [
        {"report_date": date.today().isoformat(), "tickets_sold": 36, "revenue": "210.00"}
    ]


def test_store_report_agrees_with_daily_sales_for_closed_book(client, scan, seed, owner_headers):
    scan(barcode_data="045-000123-001", direction="asc")
    scan(barcode_data="045-000123-100")

    summary = client.get(f"/reports/store/{seed.store_id}", headers=owner_headers).get_json()["summary"]
    daily = client.get(f"/reports/store/{seed.store_id}/daily", headers=owner_headers).get_json()

    assert summary["remaining_tickets"] == 0
    assert summary["sold_tickets"] == daily["total_tickets_sold"] == 100


def test_store_report_checks_access(client, seed, clerk_headers):
    resp = client.get(f"/reports/store/{seed.other_store_id}", headers=clerk_headers)
    assert resp.status_code == 403
