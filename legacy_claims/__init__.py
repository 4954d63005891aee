# legacy_claims/__init__.py
import os
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .extensions import db, migrate  # SQLAlchemy shared instance


def create_app(config=None):
    """
    Build the app. `config` is read from the environment once here unless the
    caller (tests, scripts) passes its own.
    """
    config = config or Config.from_env()

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    # Config
    app.config.update(config.as_flask_config())

    # Folders
    os.makedirs(app.instance_path, exist_ok=True)
    os.makedirs(str(config.LEGACY.upload_folder), exist_ok=True)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)

    @app.teardown_request
    def teardown_request(exc):
        if exc:
            db.session.rollback()
        db.session.remove()

    # Errors
    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        return jsonify({"success": False, "error": f"El archivo excede el límite de {limit_mb}MB"}), 413

    # Blueprints
    from .api import api_bp
    app.register_blueprint(api_bp)

    @app.route("/api/health")
    def api_health_inline():
        return jsonify({"ok": True, "status": "up"})

    # Import models so migrations / create_all see them
    from . import models  # noqa: F401
    with app.app_context():
        app.logger.info("[BOOT] App ready.")

    return app
