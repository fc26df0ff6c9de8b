"""
Trait Titans Web API configuration.
"""
import os

WEB_HOST = os.environ.get("TITANS_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("TITANS_WEB_PORT", "5000"))
WEB_SECRET_KEY = os.environ.get("TITANS_WEB_SECRET", "change-me-in-production")
