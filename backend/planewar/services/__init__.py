"""Services package."""
from .announcement_service import AnnouncementService
from .wechat_service import WeChatAuthService

__all__ = ["AnnouncementService", "WeChatAuthService"]
