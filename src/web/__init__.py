"""
Trait Titans Flask app factory.
JSON API over the battle core for the browser client.
"""
from typing import Optional

from flask import Flask

from src.systems.arena import PvpArena
from src.web import config as web_config


def create_app(arena: Optional[PvpArena] = None):
    app = Flask(__name__)
    app.secret_key = web_config.WEB_SECRET_KEY

    # One arena per app; its history lives as long as the process
    app.extensions["arena"] = arena or PvpArena()

    from src.web.routes.api import bp as api_bp
    app.register_blueprint(api_bp, url_prefix="/api")

    return app
