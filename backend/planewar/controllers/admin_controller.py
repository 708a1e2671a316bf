"""Admin controller for managing announcements (full CRUD)."""
import logging

from flask import Blueprint, jsonify, request

from ..errors import NotFoundError, ValidationError
from ..extensions import get_announcement_service

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@admin_bp.route("/announcements", methods=["GET"])
def list_announcements():
    """List every announcement, including expired and future ones."""
    announcements = get_announcement_service().list_all()
    return jsonify({
        "success": True,
        "announcements": announcements,
        "total": len(announcements),
    })


@admin_bp.route("/announcements/<ann_id>", methods=["GET"])
def get_announcement(ann_id: str):
    """Get a single announcement."""
    try:
        announcement = get_announcement_service().get(ann_id)
        return jsonify({"success": True, "announcement": announcement})
    except NotFoundError as exc:
        return jsonify({"success": False, "message": exc.message}), exc.status_code


@admin_bp.route("/announcements", methods=["POST"])
def create_announcement():
    """Create a new announcement."""
    try:
        announcement = get_announcement_service().create(_json_body())
        return jsonify({
            "success": True,
            "message": "Announcement created",
            "announcement": announcement,
        })
    except ValidationError as exc:
        logging.warning("Create announcement rejected: %s", exc.message)
        return jsonify({"success": False, "message": exc.message}), exc.status_code


@admin_bp.route("/announcements/<ann_id>", methods=["PUT"])
def update_announcement(ann_id: str):
    """Apply a partial update to an announcement."""
    try:
        announcement = get_announcement_service().update(ann_id, _json_body())
        return jsonify({
            "success": True,
            "message": "Announcement updated",
            "announcement": announcement,
        })
    except (NotFoundError, ValidationError) as exc:
        logging.warning("Update of announcement %s rejected: %s", ann_id, exc.message)
        return jsonify({"success": False, "message": exc.message}), exc.status_code


@admin_bp.route("/announcements/<ann_id>", methods=["DELETE"])
def delete_announcement(ann_id: str):
    """Delete an announcement permanently."""
    try:
        get_announcement_service().delete(ann_id)
        return jsonify({"success": True, "message": "Announcement deleted"})
    except NotFoundError as exc:
        logging.warning("Delete of announcement %s rejected: %s", ann_id, exc.message)
        return jsonify({"success": False, "message": exc.message}), exc.status_code
