"""Configuration package."""
import os

# Placeholder values shipped in sample env files; treated as "not configured".
WECHAT_PLACEHOLDERS = ("", "your-appid", "your-secret")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "t", "yes")


class Config:
    """Base configuration."""

    DEBUG = _env_bool("DEBUG", "False")
    TESTING = False
    PORT = int(os.getenv("PORT", "3001"))
    HOST = os.getenv("HOST", "0.0.0.0")

    WECHAT_APPID = os.getenv("WECHAT_APPID", "")
    WECHAT_SECRET = os.getenv("WECHAT_SECRET", "")
    WECHAT_API_URL = os.getenv("WECHAT_API_URL", "https://api.weixin.qq.com/sns/jscode2session")
    WECHAT_TIMEOUT = float(os.getenv("WECHAT_TIMEOUT", "5"))

    SEED_ANNOUNCEMENTS = _env_bool("SEED_ANNOUNCEMENTS", "true")
    ANNOUNCEMENTS_SEED_FILE = os.getenv("ANNOUNCEMENTS_SEED_FILE", "")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Test configuration: fixed credentials, no network defaults."""

    TESTING = True
    DEBUG = False
    WECHAT_APPID = "wx-test-appid-0001"
    WECHAT_SECRET = "test-secret"
    WECHAT_API_URL = "https://wechat.invalid/sns/jscode2session"
    SEED_ANNOUNCEMENTS = True
    ANNOUNCEMENTS_SEED_FILE = ""


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


def get_config(config_name: str = "default") -> Config:
    """Get configuration by name.

    Args:
        config_name: Name of the configuration.

    Returns:
        Configuration class.
    """
    return config_by_name.get(config_name, DevelopmentConfig)


def is_wechat_configured(appid: str, secret: str) -> bool:
    """Return True when both WeChat credentials are set to real values."""
    return appid not in WECHAT_PLACEHOLDERS and secret not in WECHAT_PLACEHOLDERS
