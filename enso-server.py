#!/usr/bin/env python3
"""
Enso Bundle Server

Browse networks, protocols, actions and tokens, and submit bundles
through the Enso API.
"""

import uvicorn

from enso.adapters.web.server import app
from enso.config import CONFIG

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=CONFIG["port"], log_level="info")
