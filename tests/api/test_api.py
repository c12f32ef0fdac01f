from __future__ import annotations

from datetime import datetime

import pytest

from src.crew_timekeeping.crew_timekeeping.container import build_memory_container
from src.crew_timekeeping.crew_timekeeping.core.exceptions import StoreError
from src.crew_timekeeping.crew_timekeeping.main import create_app
from src.crew_timekeeping.crew_timekeeping.payroll.rates import FixedRateSource
from src.crew_timekeeping.crew_timekeeping.workers.model import Worker


@pytest.fixture()
def container():
    return build_memory_container(
        workers=[Worker(1, "Ana"), Worker(2, "Ben")],
        rates=FixedRateSource(20.0),
    )


@pytest.fixture()
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_clock_cycle_and_daily_queries(client):
    r = client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T07:00:00"})
    assert r.status_code == 201
    assert r.get_json()["block"]["block_number"] == 1

    status = client.get("/api/workers/1/status").get_json()
    assert status["is_clocked_in"] is True
    assert status["state"] == "CLOCKED_IN"
    assert client.get("/api/workers/clocked-in").get_json()["worker_ids"] == [1]

    r = client.post("/api/workers/1/clock-out", json={"timestamp": "2026-01-05T10:00:00"})
    assert r.status_code == 200
    assert r.get_json()["block"]["hours_worked"] == pytest.approx(3.0)

    client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T13:00:00"})
    client.post("/api/workers/1/clock-out", json={"timestamp": "2026-01-05T17:00:00"})

    blocks = client.get("/api/workers/1/blocks?date=2026-01-05").get_json()["blocks"]
    assert [b["block_number"] for b in blocks] == [1, 2]
    assert blocks[1]["label"] == "Block 2: 13:00 - 17:00"

    hours = client.get("/api/workers/1/hours?date=2026-01-05").get_json()
    assert hours["hours"] == pytest.approx(7.0)
    assert hours["display"] == "7:00"


def test_clock_errors_are_reported_not_raised(client):
    r = client.post("/api/workers/1/clock-out")
    assert r.status_code == 409
    assert r.get_json() == {"success": False, "message": "Worker 1 is not currently clocked in"}

    client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T07:00:00"})
    r = client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T08:00:00"})
    assert r.status_code == 409

    assert client.post("/api/workers/77/clock-in").status_code == 404
    assert client.post("/api/workers/2/clock-in", json={"timestamp": "yesterday"}).status_code == 400


def test_weekly_report_and_payroll(client):
    for day in range(5, 10):
        client.post("/api/workers/1/clock-in", json={"timestamp": f"2026-01-{day:02d}T06:00:00"})
        client.post("/api/workers/1/clock-out", json={"timestamp": f"2026-01-{day:02d}T14:30:00"})

    report = client.get("/api/workers/1/weekly-report?week=2026-01-07").get_json()
    assert report["week_start"] == "2026-01-05"
    assert report["total_hours"] == "42:30"
    assert report["overtime_hours"] == "2:30"
    assert report["is_overtime"] is True
    assert len(report["daily"]) == 7

    payroll = client.get("/api/workers/1/payroll?start=2026-01-05&end=2026-01-07").get_json()
    assert payroll["total_hours"] == "17:00"
    assert payroll["estimated_pay"] == "$340.00"

    assert client.get("/api/workers/1/payroll?start=2026-01-07").status_code == 400

    overtime = client.get("/api/reports/overtime?week=2026-01-05").get_json()
    assert [w["worker_id"] for w in overtime["workers"]] == [1]
    assert overtime["estimated_overtime_cost"] == "$75.00"


def test_crew_segments_and_work_order_total(client):
    r = client.post(
        "/api/segments",
        json={"start_time": "2026-04-14T07:00:00", "team_size": 5, "team_members": ["A", "B"], "work_order_id": 9},
    )
    assert r.status_code == 201
    seg_id = r.get_json()["segment"]["segment_id"]

    r = client.post(
        f"/api/segments/{seg_id}/team",
        json={"at": "2026-04-14T11:00:00", "team_size": 2, "team_members": ["A", "B"]},
    )
    body = r.get_json()
    assert body["closed"]["total_hours"] == pytest.approx(20.0)
    new_id = body["opened"]["segment_id"]

    r = client.post(f"/api/segments/{new_id}/close", json={"end_time": "2026-04-14T12:30:00"})
    assert r.get_json()["segment"]["total_hours"] == pytest.approx(3.0)

    assert client.post(f"/api/segments/{new_id}/close", json={"end_time": "2026-04-14T13:00:00"}).status_code == 409

    totals = client.get("/api/work-orders/9/hours").get_json()
    assert totals["total_hours"] == pytest.approx(23.0)
    assert totals["display"] == "23:00"
    assert len(totals["segments"]) == 2

    assert client.post("/api/segments", json={"team_members": []}).status_code == 400


def test_store_failure_maps_to_503(monkeypatch, client, container):
    def broken(*args, **kwargs):
        raise StoreError("disk full")

    monkeypatch.setattr(container.blocks_repo, "save", broken)

    r = client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T07:00:00"})
    assert r.status_code == 503
    assert r.get_json()["success"] is False


def test_offset_timestamps_are_stored_as_local_time(client):
    r = client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T07:00:00+00:00"})
    assert r.status_code == 201
    work_date = r.get_json()["block"]["work_date"]

    assert client.get("/api/workers/1/status").status_code == 200
    assert client.get(f"/api/workers/1/blocks?date={work_date}").status_code == 200
    assert client.get(f"/api/workers/1/hours?date={work_date}").status_code == 200

    r = client.post("/api/workers/1/clock-out", json={"timestamp": "2026-01-05T15:00:00Z"})
    assert r.status_code == 200
    assert r.get_json()["block"]["hours_worked"] == pytest.approx(8.0)


@pytest.fixture()
def configured_client(monkeypatch):
    import config.testing as settings

    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(settings, "STORAGE", "memory")
    return create_app().test_client()


def test_memory_storage_uses_configured_roster(configured_client):
    r = configured_client.post("/api/workers/1/clock-in", json={"timestamp": "2026-01-05T07:00:00"})
    assert r.status_code == 201

    r = configured_client.post("/api/workers/1/clock-out", json={"timestamp": "2026-01-05T15:00:00"})
    assert r.get_json()["block"]["hours_worked"] == pytest.approx(8.0)

    assert configured_client.post("/api/workers/99/clock-in").status_code == 404


def test_memory_container_without_roster_accepts_any_worker():
    clock = build_memory_container().clock_service

    block = clock.clock_in(42, datetime(2026, 1, 5, 7))
    assert block.block_number == 1
    assert clock.is_clocked_in(42)
