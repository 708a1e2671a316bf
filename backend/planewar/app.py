"""Main Flask application factory and entry point."""
import errno
import logging
import os
import sys
import time
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import get_config, is_wechat_configured
from .config.seed import load_seed_announcements
from .controllers import admin_bp, announcement_bp, auth_bp, system_bp
from .extensions import init_services
from .services import AnnouncementService, WeChatAuthService
from .utils import now_ms


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        logging.error("Unhandled error on %s %s: %s", request.method, request.path, e)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def create_app(
    config_name: str = "default",
    announcement_service: Optional[AnnouncementService] = None,
    wechat_service: Optional[WeChatAuthService] = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Name of the configuration to use.
        announcement_service: Store to serve; a seeded one is built when omitted.
        wechat_service: WeChat client; built from the configuration when omitted.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    # Load configuration
    config = get_config(config_name)
    app.config.from_object(config)
    app.config["STARTED_AT"] = time.monotonic()
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Setup logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if announcement_service is None:
        announcement_service = AnnouncementService()
        if app.config["SEED_ANNOUNCEMENTS"]:
            announcement_service.reset(
                load_seed_announcements(now_ms(), app.config["ANNOUNCEMENTS_SEED_FILE"])
            )
    if wechat_service is None:
        wechat_service = WeChatAuthService(
            appid=app.config["WECHAT_APPID"],
            secret=app.config["WECHAT_SECRET"],
            api_url=app.config["WECHAT_API_URL"],
            timeout=app.config["WECHAT_TIMEOUT"],
        )
    init_services(app, announcement_service, wechat_service)

    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Register blueprints
    app.register_blueprint(system_bp)
    app.register_blueprint(announcement_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(auth_bp)

    _register_error_handlers(app)

    @app.before_request
    def log_request():
        logging.info("%s %s - IP: %s", request.method, request.full_path.rstrip("?"), request.remote_addr)

    return app


def main() -> None:
    """Run the Flask application."""
    config_name = os.getenv("FLASK_ENV", "development")
    app = create_app(config_name)
    config = get_config(config_name)

    logging.info("Plane War API server listening on %s:%s", config.HOST, config.PORT)
    if is_wechat_configured(config.WECHAT_APPID, config.WECHAT_SECRET):
        logging.info("WeChat configuration loaded")
    else:
        logging.warning("WeChat AppID or Secret not configured; set WECHAT_APPID and WECHAT_SECRET")

    try:
        app.run(
            debug=config.DEBUG,
            host=config.HOST,
            port=config.PORT,
        )
    except OSError as exc:
        if exc.errno == errno.EADDRINUSE:
            logging.error("Port %s is already in use", config.PORT)
        else:
            logging.error("Server failed to start: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
