from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask.views import MethodView
from sqlalchemy.exc import SQLAlchemyError

from ..errors import AssignmentMissingError, InvalidMemberError, WichtelError
from ..policies import DebugEndpointMixin, round_manager
from ..services.reveals import reveal


logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.errorhandler(InvalidMemberError)
@api_bp.errorhandler(AssignmentMissingError)
def handle_bad_name(e: WichtelError):
    return jsonify(error=e.message), 400


@api_bp.errorhandler(WichtelError)
@api_bp.errorhandler(SQLAlchemyError)
def handle_internal_error(e: Exception):
    logger.exception("Request to %s failed", request.path)
    return jsonify(error="Internal error, please try again later."), 500


class StateView(MethodView):
    def get(self):
        return jsonify(round_manager().public_view())


class DrawView(MethodView):
    def post(self):
        body = request.get_json(silent=True) or {}
        name = body.get("name") if isinstance(body, dict) else None
        result = reveal(round_manager(), name)
        return jsonify(result.to_dict())


class ResetView(MethodView):
    def post(self):
        round_manager().reset()
        return jsonify(ok=True, message="The round has been reset.")


class DebugAssignmentsView(DebugEndpointMixin):
    def get(self):
        return jsonify(round_manager().assignments())


api_bp.add_url_rule("/state", view_func=StateView.as_view("state"))
api_bp.add_url_rule("/draw", view_func=DrawView.as_view("draw"), methods=["POST"])
api_bp.add_url_rule("/reset", view_func=ResetView.as_view("reset"), methods=["POST"])
api_bp.add_url_rule("/debug-assignments", view_func=DebugAssignmentsView.as_view("debug_assignments"))
