# attendance_api/routes/attendance.py
from flask import Blueprint, current_app, jsonify, request

from ..errors import RemoteError, ValidationError
from ..integrations.google_sheets_attendance import (
    read_day_attendance,
    read_summary,
    write_day_attendance,
)

URL_PREFIX = "/attendance"
bp = Blueprint("attendance", __name__)

SUMMARY_ERROR = "Failed to fetch summary"


def _sheets():
    return current_app.extensions["sheets_client"].get()


def _required_text(source, *fields):
    """Return the fields as received; blank values count as missing."""
    values = []
    for field in fields:
        raw = source.get(field)
        value = "" if raw is None else str(raw)
        if not value.strip():
            raise ValidationError(f"Missing {' or '.join(fields)}")
        values.append(value)
    return values


def _parse_items(items):
    if not isinstance(items, list):
        raise ValidationError("Missing className, dayLabel or items")
    for pos, item in enumerate(items):
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise ValidationError(f"items[{pos}] must be an object with a string 'name'")
    return items


@bp.get("/day")
def get_day():
    class_name, day_label = _required_text(request.args, "className", "dayLabel")
    current_app.logger.debug(
        "Attendance requested", extra={"class_name": class_name, "day_label": day_label}
    )
    return jsonify(read_day_attendance(_sheets(), class_name, day_label))


@bp.put("/day")
def put_day():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    class_name, day_label = _required_text(body, "className", "dayLabel")
    items = _parse_items(body.get("items"))
    current_app.logger.debug(
        "Attendance update requested",
        extra={"class_name": class_name, "day_label": day_label, "items": len(items)},
    )
    return jsonify(write_day_attendance(_sheets(), class_name, day_label, items))


@bp.get("/summary")
def get_summary():
    (class_name,) = _required_text(request.args, "className")
    try:
        summary = read_summary(_sheets(), class_name)
    except RemoteError:
        current_app.logger.exception("Summary fetch failed", extra={"class_name": class_name})
        return jsonify({"error": SUMMARY_ERROR}), 500
    return jsonify(summary)
