from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    ledger = container.attendance_ledger

    @app.route("/api/events/<event_id>/attendance", methods=["GET"], endpoint="event_attendance")
    @admin_required
    def event_attendance(event_id: str):
        sheet = ledger.attendance_sheet(event_id)
        if sheet is None:
            return fail("Event not found", 404)
        tally = ledger.tally(event_id)
        return ok(
            sheet=[
                {"volunteer": row.volunteer.public_view(), "status": row.mark.value, "recorded": row.recorded}
                for row in sheet
            ],
            summary={"present": tally.present, "absent": tally.absent} if tally else None,
        )

    @app.route("/api/events/<event_id>/attendance", methods=["POST"], endpoint="post_attendance")
    @admin_required
    def post_attendance(event_id: str):
        marks = json_body().get("attendance")
        if not isinstance(marks, dict) or not marks:
            return fail("Attendance must be a non-empty object of volunteerId -> status", 400)

        sheet = ledger.attendance_sheet(event_id)
        if sheet is None:
            return fail("Event not found", 404)
        eligible = {row.volunteer.user_id for row in sheet}
        unknown = sorted(set(marks) - eligible)
        if unknown:
            return fail(f"Not confirmed for this event: {', '.join(unknown)}", 400)

        ledger.post_attendance(event_id, marks)
        return ok(message="Attendance submitted")

    @app.route("/api/events/<event_id>/attendance", methods=["DELETE"], endpoint="delete_attendance")
    @admin_required
    def delete_attendance(event_id: str):
        if not ledger.delete_attendance(event_id):
            return fail("No attendance recorded for this event", 404)
        return ok(message="Attendance record deleted")

    @app.route("/api/me/attendance", endpoint="my_attendance")
    @login_required
    def my_attendance():
        history = ledger.volunteer_history(session["user_id"])
        return ok(
            attendance=[
                {
                    "eventId": h.event_id,
                    "eventName": h.event_name,
                    "date": h.date,
                    "status": h.mark.value if h.mark else None,
                }
                for h in history
            ]
        )
