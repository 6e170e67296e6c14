"""
asgi.py -- ASGI entry point for the Quora API.

api/main.py assembles the whole application (routers, middleware, exception
handlers, lifespan); this module only exposes it under the name servers look
for.

Run with:  uvicorn asgi:app --reload
           python main.py serve
"""

from api.main import app

__all__ = ["app"]
