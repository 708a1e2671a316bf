"""Controllers package."""
from .admin_controller import admin_bp
from .announcement_controller import announcement_bp
from .auth_controller import auth_bp
from .system_controller import system_bp

__all__ = ["admin_bp", "announcement_bp", "auth_bp", "system_bp"]
