from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, fail, json_body, login_required, ok
from ..container import Container
from ..core.enums import RegistrationOutcome, RegistrationStatus, Role
from ..core.exceptions import AuthorizationError
from .model import Event


def register(app: Flask, container: Container) -> None:
    def _event_view(event: Event) -> dict:
        counts = container.event_service.registration_counts(event)
        return {**event.to_dict(), "confirmedCount": counts.confirmed, "registrationCount": counts.total}

    @app.route("/api/events", methods=["GET"], endpoint="list_events")
    @login_required
    def list_events():
        return ok(events=[_event_view(e) for e in container.event_service.list_events()])

    @app.route("/api/events", methods=["POST"], endpoint="create_event")
    @admin_required
    def create_event():
        data = json_body()
        event = container.event_service.create_event(data.get("name", ""), data.get("date", ""), data.get("description", ""))
        return ok(201, event=_event_view(event))

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="update_event")
    @admin_required
    def update_event(event_id: str):
        data = json_body()
        event = container.event_service.update_event(
            event_id, data.get("name", ""), data.get("date", ""), data.get("description", "")
        )
        if not event:
            return fail("Event not found", 404)
        return ok(event=_event_view(event))

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="delete_event")
    @admin_required
    def delete_event(event_id: str):
        if not container.event_service.delete_event(event_id):
            return fail("Event not found", 404)
        return ok(message="Event deleted")

    @app.route("/api/events/<event_id>/register", methods=["POST"], endpoint="register_for_event")
    @login_required
    def register_for_event(event_id: str):
        if session.get("role") != Role.VOLUNTEER.value:
            raise AuthorizationError("Only volunteers can register for events")
        user = container.user_service.get_user(session["user_id"])
        if not user or not user.approved:
            raise AuthorizationError("Your account is waiting for admin approval")

        outcome = container.event_service.register_for_event(event_id, user.user_id)
        if outcome == RegistrationOutcome.EVENT_NOT_FOUND:
            return fail("Event not found", 404)
        if outcome == RegistrationOutcome.ALREADY_REGISTERED:
            return fail("You are already registered for this event", 409)
        return ok(201, message="Registration submitted, waiting for confirmation")

    @app.route("/api/events/<event_id>/registrations", endpoint="event_registrations")
    @admin_required
    def event_registrations(event_id: str):
        pending = container.event_service.registrants(event_id, RegistrationStatus.PENDING)
        confirmed = container.event_service.registrants(event_id, RegistrationStatus.CONFIRMED)
        if pending is None or confirmed is None:
            return fail("Event not found", 404)
        return ok(
            pending=[u.public_view() for u in pending],
            confirmed=[u.public_view() for u in confirmed],
        )

    @app.route(
        "/api/events/<event_id>/registrations/<volunteer_id>/confirm",
        methods=["POST"],
        endpoint="confirm_registration",
    )
    @admin_required
    def confirm_registration(event_id: str, volunteer_id: str):
        if not container.event_service.confirm_registration(event_id, volunteer_id):
            return fail("Registration not found", 404)
        return ok(message="Registration confirmed")
