from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.http import json_error, login_required
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _domain_error(e: Exception):
        if isinstance(e, NotFoundError):
            return json_error(str(e), 404)
        if isinstance(e, AuthorizationError):
            return json_error(str(e), 403)
        return json_error(str(e), 400)

    @app.route("/api/hr/clocking/check-in", methods=["POST"], endpoint="clocking_check_in")
    @login_required
    def clocking_check_in():
        try:
            record = container.clocking_service.check_in(int(session["user_id"]))
        except (NotFoundError, AuthorizationError, ValidationError) as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Check-in failed")
            return json_error("System error while recording the check-in", 500)

        return jsonify({"success": True, "message": "Check-in recorded", "record": record.to_dict()})

    @app.route("/api/hr/clocking/check-out", methods=["POST"], endpoint="clocking_check_out")
    @login_required
    def clocking_check_out():
        try:
            result = container.clocking_service.check_out(int(session["user_id"]))
        except (NotFoundError, AuthorizationError, ValidationError) as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Check-out failed")
            return json_error("System error while recording the check-out", 500)

        return jsonify(
            {
                "success": True,
                "message": "Check-out recorded",
                "record": result.record.to_dict(),
                "worked_minutes_today": result.worked_minutes_today,
            }
        )

    @app.route("/api/hr/clocking/my-today", methods=["GET"], endpoint="clocking_my_today")
    @login_required
    def clocking_my_today():
        try:
            status = container.clocking_service.today_status(int(session["user_id"]))
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Reading today's clocking status failed")
            return json_error("System error while reading today's status", 500)

        return jsonify({"success": True, **status.to_dict()})
