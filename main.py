#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Main application entry point - Responses to chat completions proxy
"""

from responses_proxy.app import create_app
from responses_proxy.config import settings

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.LISTEN_PORT,
        http="httptools",
        reload=False,
        log_level="info",
    )
