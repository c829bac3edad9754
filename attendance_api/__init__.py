"""Application factory and blueprint registration."""

import importlib
import inspect
import logging
import pkgutil

from flask import Blueprint, Flask, jsonify

from .config import Config
from .errors import AttendanceApiError
from .integrations.sheets_client import SheetsClient, SheetsClientHandle
from .utils.logger import init_logging


def create_app(overrides=None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    try:
        init_logging(app)
    except OSError:  # pragma: no cover - unwritable log directory
        logging.basicConfig(level=logging.INFO)
        app.logger.exception("init_logging failed; using basic logging fallback")

    # Shared Sheets client -------------------------------------------------
    def _build_client() -> SheetsClient:
        return SheetsClient.from_credentials(
            app.config.get("GOOGLE_SERVICE_ACCOUNT_JSON", ""),
            app.config["SPREADSHEET_ID"],
        )

    app.extensions["sheets_client"] = SheetsClientHandle(_build_client)

    # Basic routes ---------------------------------------------------------
    @app.get("/healthz")
    def healthz():
        """Lightweight liveness probe."""

        return "ok", 200

    # Blueprint auto-discovery ---------------------------------------------
    def register_all_blueprints() -> None:
        base_pkg = f"{__name__}.routes"
        pkg = importlib.import_module(base_pkg)

        for modinfo in pkgutil.iter_modules(pkg.__path__):
            module = importlib.import_module(f"{base_pkg}.{modinfo.name}")
            blueprints = [
                obj
                for _, obj in inspect.getmembers(module)
                if isinstance(obj, Blueprint)
            ]
            url_prefix = getattr(module, "URL_PREFIX", None)
            for bp in blueprints:
                prefix = url_prefix or f"/{modinfo.name}"
                app.register_blueprint(bp, url_prefix=prefix)
                app.logger.info("Registered %s at %s", bp.name, prefix)

    register_all_blueprints()

    # Error handlers -------------------------------------------------------
    @app.errorhandler(AttendanceApiError)
    def _handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(404)
    def _handle_404(error):
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(405)
    def _handle_405(error):
        return jsonify({"error": "Method Not Allowed"}), 405

    @app.errorhandler(500)
    def _handle_500(error):
        app.logger.exception("500: %s", error)
        return jsonify({"error": "Internal Server Error"}), 500

    return app
