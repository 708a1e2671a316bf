"""System controller: liveness probe, service descriptor and API document."""
import time

from flask import Blueprint, current_app, jsonify

from .. import __version__
from ..extensions import get_wechat_service
from ..utils import now_ms

system_bp = Blueprint("system", __name__)

ENDPOINTS = {
    "health": "/health",
    "wechatLogin": "/api/wechat/login",
    "announcements": "/api/announcements",
    "adminAnnouncements": "/api/admin/announcements",
    "openapi": "/openapi.json",
}

_ERROR = {"$ref": "#/components/schemas/ErrorResponse"}
_ANNOUNCEMENT_LIST = {"$ref": "#/components/schemas/AnnouncementList"}
_ANNOUNCEMENT_RESULT = {"$ref": "#/components/schemas/AnnouncementResult"}
_ID_PARAM = {"in": "path", "name": "id", "required": True, "schema": {"type": "string"}}


def _json(schema: dict, description: str) -> dict:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


# Minimal OpenAPI spec for exposed endpoints
OPENAPI_SPEC = {
    "openapi": "3.0.3",
    "info": {
        "title": "Plane War API",
        "version": __version__,
        "description": "WeChat login and in-game announcements.",
    },
    "paths": {
        "/health": {"get": {"summary": "Liveness probe", "responses": {"200": _json({"type": "object"}, "Alive")}}},
        "/api/wechat/login": {
            "post": {
                "summary": "Exchange a wx.login code for the player's openid",
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/LoginRequest"}}},
                },
                "responses": {
                    "200": _json({"$ref": "#/components/schemas/LoginResponse"}, "Logged in"),
                    "400": _json(_ERROR, "Missing code or WeChat API error"),
                    "500": _json(_ERROR, "Server misconfigured or WeChat unreachable"),
                },
            }
        },
        "/api/announcements": {
            "get": {
                "summary": "Active announcements, highest priority first",
                "responses": {"200": _json(_ANNOUNCEMENT_LIST, "Announcements list")},
            }
        },
        "/api/admin/announcements": {
            "get": {
                "summary": "All announcements, including expired ones",
                "responses": {"200": _json(_ANNOUNCEMENT_LIST, "Announcements list")},
            },
            "post": {
                "summary": "Create an announcement",
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/CreateRequest"}}},
                },
                "responses": {
                    "200": _json(_ANNOUNCEMENT_RESULT, "Created"),
                    "400": _json(_ERROR, "Missing required fields"),
                },
            },
        },
        "/api/admin/announcements/{id}": {
            "get": {
                "summary": "Get one announcement",
                "parameters": [_ID_PARAM],
                "responses": {"200": _json(_ANNOUNCEMENT_RESULT, "Found"), "404": _json(_ERROR, "Unknown id")},
            },
            "put": {
                "summary": "Partially update an announcement",
                "parameters": [_ID_PARAM],
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Announcement"}}},
                },
                "responses": {
                    "200": _json(_ANNOUNCEMENT_RESULT, "Updated"),
                    "400": _json(_ERROR, "Invalid field"),
                    "404": _json(_ERROR, "Unknown id"),
                },
            },
            "delete": {
                "summary": "Delete an announcement",
                "parameters": [_ID_PARAM],
                "responses": {"200": _json(_ERROR, "Deleted"), "404": _json(_ERROR, "Unknown id")},
            },
        },
    },
    "components": {
        "schemas": {
            "Button": {
                "type": "object",
                "properties": {"text": {"type": "string"}, "action": {"type": "string", "example": "close"}},
            },
            "Announcement": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": "string", "example": "event"},
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "image": {"type": "string"},
                    "link": {"type": "string"},
                    "linkText": {"type": "string"},
                    "showOnce": {"type": "boolean"},
                    "priority": {"type": "integer"},
                    "startTime": {"type": "integer", "description": "ms since epoch"},
                    "endTime": {"type": "integer", "description": "ms since epoch"},
                    "buttons": {"type": "array", "items": {"$ref": "#/components/schemas/Button"}},
                    "createdAt": {"type": "integer"},
                    "updatedAt": {"type": "integer"},
                },
            },
            "CreateRequest": {
                "type": "object",
                "properties": {
                    "type": {"type": "string"},
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "image": {"type": "string"},
                    "link": {"type": "string"},
                    "linkText": {"type": "string"},
                    "showOnce": {"type": "boolean"},
                    "priority": {"type": "integer", "default": 50},
                    "duration": {"type": "number", "default": 30, "description": "days"},
                    "buttons": {"type": "array", "items": {"$ref": "#/components/schemas/Button"}},
                },
                "required": ["type", "title", "content"],
            },
            "AnnouncementList": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean"},
                    "announcements": {"type": "array", "items": {"$ref": "#/components/schemas/Announcement"}},
                    "total": {"type": "integer"},
                },
            },
            "AnnouncementResult": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean"},
                    "message": {"type": "string"},
                    "announcement": {"$ref": "#/components/schemas/Announcement"},
                },
            },
            "LoginRequest": {
                "type": "object",
                "properties": {"code": {"type": "string"}},
                "required": ["code"],
            },
            "LoginResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean"},
                    "openid": {"type": "string"},
                    "unionid": {"type": "string", "nullable": True},
                },
            },
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "error": {"type": "string"},
                    "message": {"type": "string"},
                    "errcode": {"type": "integer"},
                },
            },
        }
    },
}


@system_bp.route("/health")
def health():
    """Liveness probe."""
    return jsonify({
        "success": True,
        "status": "ok",
        "timestamp": now_ms(),
        "uptime": round(time.monotonic() - current_app.config["STARTED_AT"], 3),
        "message": "Server is running",
    })


@system_bp.route("/")
def index():
    """Describe the service and its endpoints."""
    return jsonify({
        "success": True,
        "message": "Plane War API server",
        "version": __version__,
        "endpoints": ENDPOINTS,
        "config": {"appid": get_wechat_service().masked_appid()},
    })


@system_bp.route("/openapi.json")
def openapi_json():
    """Serve OpenAPI spec."""
    return jsonify(OPENAPI_SPEC)
