from __future__ import annotations

import os
from flask import Flask

from .extensions import csrf
from .policies import parse_participants
from .services import FileAssignmentStore
from .views.api import create_api_blueprint
from .views.public import create_public_blueprint


DEFAULT_PARTICIPANTS = "ibo,adnan,ahmet"


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__)

    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    app.config["SANTA_PARTICIPANTS"] = os.environ.get("SANTA_PARTICIPANTS", DEFAULT_PARTICIPANTS)
    app.config["SANTA_DATA_FILE"] = os.environ.get(
        "SANTA_DATA_FILE", os.path.join(app.instance_path, "assignments.json")
    )
    app.config["SANTA_MAX_ATTEMPTS"] = int(os.environ.get("SANTA_MAX_ATTEMPTS", "1000"))
    # Typing this instead of a name throws away the current draw
    app.config["SANTA_RESET_KEYWORD"] = os.environ.get("SANTA_RESET_KEYWORD", "sıfırla").strip().lower()
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO")

    if test_config:
        app.config.update(test_config)

    app.config["SANTA_PARTICIPANTS"] = parse_participants(app.config["SANTA_PARTICIPANTS"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    csrf.init_app(app)

    store = app.config.get("SANTA_STORE") or FileAssignmentStore(
        app.config["SANTA_DATA_FILE"],
        app.config["SANTA_PARTICIPANTS"],
        max_attempts=app.config["SANTA_MAX_ATTEMPTS"],
    )
    app.extensions["santa_store"] = store

    # Blueprints
    app.register_blueprint(create_public_blueprint(store))
    app.register_blueprint(create_api_blueprint(store))

    app.logger.info("Serving assignments from %r for %s", store, ", ".join(store.participants))
    return app
