"""WSGI entry point for Taskboard."""

import os

from taskboard import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
