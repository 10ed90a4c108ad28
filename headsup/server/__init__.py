"""
Headsup Server - FastAPI layer for a single local table
"""

from headsup.server.app import app, create_app

__all__ = ["app", "create_app"]
