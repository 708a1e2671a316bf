"""Per-application service instances, reachable from request handlers."""
from flask import Flask, current_app

from .services import AnnouncementService, WeChatAuthService

ANNOUNCEMENTS_KEY = "planewar.announcements"
WECHAT_KEY = "planewar.wechat"


def init_services(app: Flask, announcement_service: AnnouncementService, wechat_service: WeChatAuthService) -> None:
    app.extensions[ANNOUNCEMENTS_KEY] = announcement_service
    app.extensions[WECHAT_KEY] = wechat_service


def get_announcement_service() -> AnnouncementService:
    return current_app.extensions[ANNOUNCEMENTS_KEY]


def get_wechat_service() -> WeChatAuthService:
    return current_app.extensions[WECHAT_KEY]
