#!/usr/bin/env python3
"""Run the analytics API server."""

import uvicorn

from settings import API_HOST, API_PORT
from settings.logging import setup_logging

if __name__ == "__main__":
    setup_logging()
    uvicorn.run("web.api.app:app", host=API_HOST, port=API_PORT)
