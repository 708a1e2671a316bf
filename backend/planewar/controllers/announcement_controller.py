"""Announcement controller for the public (game client) endpoint."""
from flask import Blueprint, jsonify

from ..extensions import get_announcement_service

announcement_bp = Blueprint("announcement", __name__)


@announcement_bp.route("/api/announcements")
def api_get_announcements():
    """API endpoint to get currently active announcements, highest priority first."""
    announcements = get_announcement_service().list_active()
    return jsonify({
        "success": True,
        "announcements": announcements,
        "total": len(announcements),
    })
