from __future__ import annotations

import os
import random
from flask import Flask

from .extensions import db, migrate
from .services.assignments import DEFAULT_MAX_ATTEMPTS
from .services.rounds import RoundManager
from .views.api import api_bp
from .views.public import public_bp


DEFAULT_MEMBERS = [
    "Anni",
    "Ben",
    "Beni",
    "Daniel",
    "Elisa",
    "Till",
    "Dustin",
    "Johann",
    "Lara",
    "Marvin",
    "Paul",
]


def parse_members(value) -> list[str]:
    """Accepts a comma separated string or a sequence of names."""
    if isinstance(value, str):
        value = value.split(",")
    members = [name.strip() for name in value if name and name.strip()]
    if len(members) < 2:
        raise ValueError("SANTA_MEMBERS needs at least 2 names.")
    if len(set(members)) != len(members):
        raise ValueError("SANTA_MEMBERS contains duplicate names.")
    return members


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__)

    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///wichtel.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # The group is fixed at configuration time
    app.config["SANTA_MEMBERS"] = os.environ.get("SANTA_MEMBERS") or DEFAULT_MEMBERS
    app.config["SANTA_MAX_ATTEMPTS"] = int(os.environ.get("SANTA_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
    app.config["SANTA_SEED"] = os.environ.get("SANTA_SEED") or None
    app.config["SANTA_DEBUG_ENDPOINT"] = _env_flag("SANTA_DEBUG_ENDPOINT", "1")

    if config:
        app.config.update(config)

    members = parse_members(app.config["SANTA_MEMBERS"])
    app.config["SANTA_MEMBERS"] = members

    seed = app.config["SANTA_SEED"]
    rng = random.Random(seed) if seed is not None else None

    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        db.create_all()

    app.extensions["round_manager"] = RoundManager(
        members,
        rng=rng,
        max_attempts=int(app.config["SANTA_MAX_ATTEMPTS"]),
    )

    # Blueprints
    app.register_blueprint(public_bp)
    app.register_blueprint(api_bp)

    return app
