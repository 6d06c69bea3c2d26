#!/usr/bin/env python3
"""Development server runner for Brass combat."""

import uvicorn

from brass.utils.constants import API_HOST, API_PORT

if __name__ == "__main__":
    uvicorn.run(
        "brass.server.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,  # Auto-reload on code changes
        log_level="info",
    )
