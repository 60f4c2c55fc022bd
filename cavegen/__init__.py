"""
project: cavegen
module: __init__.py
License: MIT

Flask application factory and configuration setup.

The generation core lives in ``cavegen.cave`` and has no Flask dependency at
call time; this module only wires the HTTP API around it. Configuration is
sourced from environment variables (optionally via a ``.env`` file) with
reasonable defaults for development. A local ``instance/`` directory holds
runtime files such as the server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so CAVEGEN_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()

__version__ = "0.1.0"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(overrides: dict | None = None) -> Flask:
    """Build the Flask app with the cave API blueprint registered."""
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve requests; only the log file needs it
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        CAVEGEN_ENABLE_GENERATION_METRICS=_env_flag("CAVEGEN_ENABLE_GENERATION_METRICS", "1"),
        CAVEGEN_MAX_DIMENSION=int(os.getenv("CAVEGEN_MAX_DIMENSION", "512")),
        CAVEGEN_DISABLE_CACHE=_env_flag("CAVEGEN_DISABLE_CACHE", "0"),
    )
    if overrides:
        app.config.update(overrides)

    from cavegen.routes.cave_api import bp_cave

    app.register_blueprint(bp_cave)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "__version__"]
