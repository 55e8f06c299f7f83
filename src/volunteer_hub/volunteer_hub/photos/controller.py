from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/photos", methods=["GET"], endpoint="list_photos")
    @login_required
    def list_photos():
        return ok(photos=[p.to_dict() for p in container.photo_service.list_photos()])

    @app.route("/api/photos", methods=["POST"], endpoint="add_photo")
    @admin_required
    def add_photo():
        data = json_body()
        photo = container.photo_service.add_photo(
            data.get("imageUrl", ""), data.get("description", ""), data.get("eventName", ""), data.get("date")
        )
        return ok(201, photo=photo.to_dict())

    @app.route("/api/photos/<photo_id>", methods=["PUT"], endpoint="update_photo")
    @admin_required
    def update_photo(photo_id: str):
        data = json_body()
        photo = container.photo_service.update_photo(photo_id, data.get("description", ""), data.get("eventName", ""))
        if not photo:
            return fail("Photo not found", 404)
        return ok(photo=photo.to_dict())

    @app.route("/api/photos/<photo_id>", methods=["DELETE"], endpoint="delete_photo")
    @admin_required
    def delete_photo(photo_id: str):
        if not container.photo_service.delete_photo(photo_id):
            return fail("Photo not found", 404)
        return ok(message="Photo deleted")
