from __future__ import annotations

from flask import Flask, request, session

from ..common.web import fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/chat/messages", methods=["GET"], endpoint="list_messages")
    @login_required
    def list_messages():
        since = request.args.get("since")
        if since is not None and not since.isdigit():
            return fail("'since' must be a millisecond timestamp", 400)
        messages = container.message_log.list_messages(int(since) if since is not None else None)
        return ok(messages=[m.to_dict() for m in messages])

    @app.route("/api/chat/messages", methods=["POST"], endpoint="post_message")
    @login_required
    def post_message():
        data = json_body()
        message = container.message_log.post_message(
            session["user_id"], session.get("name", ""), session["role"], str(data.get("text", ""))
        )
        return ok(201, message=message.to_dict())
