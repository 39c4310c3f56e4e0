from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.http import json_error
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("username") or "", data.get("password") or "")
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except Exception:
            logger.exception("Login failed")
            return json_error("System error during login", 500)

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify({"success": True, "user": {"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
