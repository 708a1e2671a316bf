"""Auth controller for WeChat mini-game login."""
from flask import Blueprint, jsonify, request

from ..errors import ConfigurationError, UpstreamError, ValidationError
from ..extensions import get_wechat_service

auth_bp = Blueprint("auth", __name__, url_prefix="/api/wechat")


@auth_bp.route("/login", methods=["POST"])
def wechat_login():
    """Exchange a ``wx.login`` code for the player's openid."""
    payload = request.get_json(silent=True) or {}
    code = payload.get("code") if isinstance(payload, dict) else None
    try:
        identity = get_wechat_service().exchange_code(code)
        return jsonify({"success": True, **identity})
    except UpstreamError as exc:
        body = {"success": False, "error": exc.message}
        if exc.errcode is not None:
            body["errcode"] = exc.errcode
        return jsonify(body), exc.status_code
    except (ValidationError, ConfigurationError) as exc:
        return jsonify({"success": False, "error": exc.message}), exc.status_code
