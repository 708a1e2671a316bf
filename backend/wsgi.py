"""WSGI entry point (gunicorn, serverless hosts)."""
import os

from planewar.app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
