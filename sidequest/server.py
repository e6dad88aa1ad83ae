#!/usr/bin/env python3
"""
Side Quest server: entrypoint for uvicorn sidequest.server:app.

Run directly: python -m sidequest.server
"""

from .app import app

if __name__ == "__main__":
    import uvicorn
    from .config import get_config
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
