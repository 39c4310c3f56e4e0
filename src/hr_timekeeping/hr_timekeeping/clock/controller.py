from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.http import admin_required, json_error, login_required
from ..common.validators import require_bool
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hr/settings/system-clock", methods=["GET"], endpoint="system_clock_get")
    @login_required
    def system_clock_get():
        try:
            view = container.clock_service.get_configuration()
        except Exception:
            logger.exception("Failed to read system clock configuration")
            return json_error("System error while reading the system clock", 500)
        return jsonify(view.to_dict())

    @app.route("/api/hr/settings/system-clock", methods=["PUT"], endpoint="system_clock_update")
    @admin_required
    def system_clock_update():
        data = request.get_json(silent=True) or {}
        try:
            enabled = require_bool(data.get("enabled"), "enabled")
            custom = data.get("customDatetime")
            if custom is not None and not isinstance(custom, str):
                raise ValidationError("customDatetime must be a string or null")

            view = container.clock_service.set_configuration(
                enabled=enabled,
                custom_datetime=custom,
                acting_user=int(session["user_id"]),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Failed to update system clock configuration")
            return json_error("System error while updating the system clock", 500)
        return jsonify(view.to_dict())

    @app.route("/api/hr/settings/system-clock/reset", methods=["POST"], endpoint="system_clock_reset")
    @admin_required
    def system_clock_reset():
        try:
            view = container.clock_service.reset(acting_user=int(session["user_id"]))
        except Exception:
            logger.exception("Failed to reset system clock")
            return json_error("System error while resetting the system clock", 500)
        return jsonify(view.to_dict())
