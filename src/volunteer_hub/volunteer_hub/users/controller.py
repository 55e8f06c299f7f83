from __future__ import annotations

from flask import Flask, request, session

from ..common.web import admin_required, fail, json_body, login_required, ok
from ..container import Container
from .model import SignupProfile


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.login(str(data.get("identifier", "")), str(data.get("password", "")))
        if not user:
            return fail("Invalid credentials", 401)

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value
        # Pending volunteers stay logged in; the client shows the pending state.
        return ok(user=user.public_view(), pending=not user.approved)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        profile = SignupProfile(
            name=data.get("name", ""),
            roll_no=data.get("rollNo", ""),
            password=str(data.get("password", "")),
            branch=data.get("branch"),
            year_sec=data.get("yearSec"),
            phone=data.get("phone"),
        )
        user = container.user_service.signup(profile)
        if not user:
            return fail("A user with this name or roll number already exists", 409)
        return ok(201, user=user.public_view(), message="Signup successful, wait for admin approval")

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        user = container.user_service.get_user(session["user_id"])
        if not user:
            session.clear()
            return fail("Account no longer exists", 401)
        return ok(user=user.public_view(), pending=not user.approved)

    @app.route("/api/admin/volunteers/pending", endpoint="pending_volunteers")
    @admin_required
    def pending_volunteers():
        users = container.user_service.list_pending_volunteers()
        return ok(volunteers=[u.public_view() for u in users])

    @app.route("/api/admin/volunteers", endpoint="volunteers")
    @admin_required
    def volunteers():
        users = container.user_service.list_volunteers(request.args.get("q", ""))
        return ok(volunteers=[u.public_view() for u in users])

    @app.route("/api/admin/volunteers/<user_id>/approve", methods=["POST"], endpoint="approve_volunteer")
    @admin_required
    def approve_volunteer(user_id: str):
        if not container.user_service.approve_user(user_id):
            return fail("User not found", 404)
        return ok(message="Volunteer approved")
