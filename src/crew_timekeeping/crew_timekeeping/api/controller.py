from __future__ import annotations

from datetime import date

import structlog
from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..container import Container
from ..core.exceptions import (
    AlreadyClockedInError,
    InvalidStateError,
    NotClockedInError,
    StoreError,
    ValidationError,
    WorkerNotFoundError,
)
from ..reporting.presenter import (
    format_hours,
    overtime_report_view,
    payroll_view,
    time_block_view,
    weekly_report_view,
    work_segment_view,
)

logger = structlog.get_logger(__name__)


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _timestamp(data: dict, key: str = "timestamp"):
    raw = data.get(key)
    if not raw:
        return None
    try:
        return parse_iso_datetime(str(raw))
    except ValueError as e:
        raise ValidationError(f"Invalid {key}: {raw!r}") from e


def _date_arg(name: str, *, default: date | None = None) -> date:
    raw = request.args.get(name, "").strip()
    if not raw:
        if default is None:
            raise ValidationError(f"Missing query parameter '{name}'")
        return default
    try:
        return parse_iso_date(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}: {raw!r} (expected YYYY-MM-DD)") from e


def register(app: Flask, container: Container) -> None:
    clock = container.clock_service
    queries = container.time_block_queries
    segments = container.segment_service
    reporting = container.reporting_service

    @app.errorhandler(AlreadyClockedInError)
    @app.errorhandler(NotClockedInError)
    @app.errorhandler(InvalidStateError)
    def handle_conflict(e):
        return _fail(str(e), 409)

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return _fail(str(e), 400)

    @app.errorhandler(WorkerNotFoundError)
    def handle_not_found(e):
        return _fail(str(e), 404)

    @app.errorhandler(StoreError)
    def handle_store(e):
        logger.error("store_error", path=request.path, error=str(e))
        return _fail("Could not save, please retry", 503)

    @app.route("/api/workers/<int:worker_id>/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(worker_id: int):
        block = clock.clock_in(worker_id, _timestamp(_body()))
        return jsonify({"success": True, "block": time_block_view(block)}), 201

    @app.route("/api/workers/<int:worker_id>/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(worker_id: int):
        block = clock.clock_out(worker_id, _timestamp(_body()))
        return jsonify({"success": True, "block": time_block_view(block)})

    @app.route("/api/workers/<int:worker_id>/status", methods=["GET"], endpoint="clock_status")
    def clock_status(worker_id: int):
        active = queries.find_active_block(worker_id)
        return jsonify(
            {
                "worker_id": worker_id,
                "state": clock.current_state(worker_id).value,
                "is_clocked_in": active is not None,
                "active_block": time_block_view(active, now=now_local()) if active else None,
            }
        )

    @app.route("/api/workers/clocked-in", methods=["GET"], endpoint="clocked_in_workers")
    def clocked_in_workers():
        return jsonify({"worker_ids": list(queries.clocked_in_workers())})

    @app.route("/api/workers/<int:worker_id>/blocks", methods=["GET"], endpoint="time_blocks")
    def time_blocks(worker_id: int):
        day = _date_arg("date", default=now_local().date())
        now = now_local()
        return jsonify(
            {
                "worker_id": worker_id,
                "date": day.isoformat(),
                "blocks": [time_block_view(b, now=now) for b in queries.find_blocks(worker_id, day)],
            }
        )

    @app.route("/api/workers/<int:worker_id>/hours", methods=["GET"], endpoint="total_hours")
    def total_hours(worker_id: int):
        day = _date_arg("date", default=now_local().date())
        hours = queries.total_hours(worker_id, day)
        return jsonify({"worker_id": worker_id, "date": day.isoformat(), "hours": hours, "display": format_hours(hours)})

    @app.route("/api/workers/<int:worker_id>/weekly-report", methods=["GET"], endpoint="weekly_report")
    def weekly_report(worker_id: int):
        week = _date_arg("week", default=now_local().date())
        return jsonify(weekly_report_view(reporting.generate_weekly_report(worker_id, week)))

    @app.route("/api/workers/<int:worker_id>/payroll", methods=["GET"], endpoint="payroll")
    def payroll(worker_id: int):
        record = reporting.calculate_payroll(worker_id, _date_arg("start"), _date_arg("end"))
        return jsonify(payroll_view(record))

    @app.route("/api/reports/overtime", methods=["GET"], endpoint="overtime_report")
    def overtime_report():
        week = _date_arg("week", default=now_local().date())
        return jsonify(overtime_report_view(reporting.generate_overtime_report(week)))

    @app.route("/api/segments", methods=["POST"], endpoint="start_segment")
    def start_segment():
        data = _body()
        if "team_size" not in data:
            raise ValidationError("team_size is required")
        work_order_id = data.get("work_order_id")
        segment = segments.start_segment(
            _timestamp(data, "start_time") or now_local(),
            data["team_size"],
            [str(m) for m in data.get("team_members") or []],
            work_order_id=int(work_order_id) if work_order_id is not None else None,
        )
        return jsonify({"success": True, "segment": work_segment_view(segment)}), 201

    @app.route("/api/segments/<int:segment_id>/close", methods=["POST"], endpoint="close_segment")
    def close_segment(segment_id: int):
        segment = segments.close_segment(segment_id, _timestamp(_body(), "end_time") or now_local())
        return jsonify({"success": True, "segment": work_segment_view(segment)})

    @app.route("/api/segments/<int:segment_id>/team", methods=["POST"], endpoint="change_team")
    def change_team(segment_id: int):
        data = _body()
        if "team_size" not in data:
            raise ValidationError("team_size is required")
        closed, opened = segments.change_team(
            segment_id,
            _timestamp(data, "at") or now_local(),
            data["team_size"],
            [str(m) for m in data.get("team_members") or []],
        )
        return jsonify({"success": True, "closed": work_segment_view(closed), "opened": work_segment_view(opened)})

    @app.route("/api/work-orders/<int:work_order_id>/hours", methods=["GET"], endpoint="work_order_hours")
    def work_order_hours(work_order_id: int):
        items = segments.segments_for_work_order(work_order_id)
        total = segments.work_order_total_hours(work_order_id)
        return jsonify(
            {
                "work_order_id": work_order_id,
                "total_hours": total,
                "display": format_hours(total),
                "segments": [work_segment_view(s) for s in items],
            }
        )
