from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.validators import parse_descriptor, parse_optional_int
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from .responses import error_response, failure, success
from .sessions import summarize_sessions


def register(app: Flask, container: Container) -> None:
    def _reply(body_and_status):
        body, status = body_and_status
        return jsonify(body), status

    def _fail(error: Exception):
        return _reply(error_response(error, expose_details=bool(current_app.config.get("EXPOSE_ERROR_DETAILS"))))

    def login_required(view):
        # Identity comes from the authentication collaborator via the session.
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _reply(failure("Authentication required", 401))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _reply(failure("Authentication required", 401))
            if session.get("role") != Role.ADMIN.value:
                return _reply(failure("Admin access required", 403))
            return view(*args, **kwargs)

        return wrapper

    def _descriptor_from_body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        return parse_descriptor(data.get("descriptor"))

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def check_in():
        try:
            descriptor = _descriptor_from_body()
            record = container.attendance_service.check_in(str(session["user_id"]), descriptor)
            return _reply(success("Checked in successfully", record.to_dict(), 201))
        except Exception as e:
            return _fail(e)

    @app.route("/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def check_out():
        try:
            descriptor = _descriptor_from_body()
            record = container.attendance_service.check_out(str(session["user_id"]), descriptor)
            return _reply(success("Checked out successfully", record.to_dict()))
        except Exception as e:
            return _fail(e)

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        try:
            record = container.attendance_service.get_today_record(str(session["user_id"]))
            return _reply(success("Today's attendance", record.to_dict() if record else None))
        except Exception as e:
            return _fail(e)

    @app.route("/attendance/<identity_id>", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history(identity_id: str):
        try:
            limit = parse_optional_int(request.args.get("limit"), "limit", positive=True)
            records = container.attendance_service.get_history(identity_id, limit=limit)
            if not records:
                return _reply(failure("No attendance records found", 404))
            return _reply(success("Attendance records", [r.to_dict() for r in records]))
        except Exception as e:
            return _fail(e)

    @app.route("/attendance/sessions/<identity_id>", methods=["GET"], endpoint="attendance_sessions")
    @login_required
    def sessions(identity_id: str):
        try:
            items = list(container.attendance_service.get_sessions(identity_id))
            summary = summarize_sessions(items)
            return _reply(
                success(
                    "Attendance sessions",
                    [s.to_dict() for s in items],
                    summary={"sessions": summary.sessions, "totalMinutes": summary.total_minutes},
                )
            )
        except Exception as e:
            return _fail(e)

    @app.route("/attendance/admin/list", methods=["GET"], endpoint="attendance_admin_list")
    @admin_required
    def admin_list():
        try:
            args = request.args
            status = args.get("status") or None
            try:
                status_value = AttendanceStatus(status) if status else None
            except ValueError as e:
                raise ValidationError("status must be 'checked-in' or 'checked-out'") from e
            try:
                start = parse_iso_date(args["start"]) if args.get("start") else None
                end = parse_iso_date(args["end"]) if args.get("end") else None
            except ValueError as e:
                raise ValidationError("start/end must be YYYY-MM-DD") from e

            limit = parse_optional_int(args.get("limit"), "limit", positive=True) or DEFAULT_ADMIN_LIST_LIMIT
            records = container.attendance_service.admin_list(
                identity_id=args.get("identity") or None,
                start_date=start,
                end_date=end,
                status=status_value,
                limit=limit,
            )
            return _reply(success("Attendance records", [r.to_dict() for r in records]))
        except Exception as e:
            return _fail(e)
