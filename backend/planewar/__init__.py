"""Plane War game backend: WeChat login and announcements."""

__version__ = "1.0.0"
