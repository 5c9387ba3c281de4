from __future__ import annotations

from flask import Blueprint, render_template
from flask.views import MethodView

from ..policies import round_manager


public_bp = Blueprint("public", __name__)


class LandingView(MethodView):
    def get(self):
        state = round_manager().public_view()
        return render_template(
            "landing.html",
            members=state["members"],
            available_members=state["availableMembers"],
            num_revealed=len(state["revealedMembers"]),
        )


public_bp.add_url_rule("/", view_func=LandingView.as_view("landing"))
