from __future__ import annotations

from flask import abort, current_app
from flask.views import MethodView

from .services.rounds import RoundManager


def round_manager() -> RoundManager:
    return current_app.extensions["round_manager"]


def debug_endpoint_enabled() -> bool:
    return bool(current_app.config.get("SANTA_DEBUG_ENDPOINT"))


class DebugEndpointMixin(MethodView):
    """
    Hides a view behind SANTA_DEBUG_ENDPOINT. Disabled views answer 404 so the
    route looks like it does not exist.
    """
    def dispatch_request(self, *args, **kwargs):
        if not debug_endpoint_enabled():
            abort(404)
        return super().dispatch_request(*args, **kwargs)
