"""Configuration defaults for Brass combat."""

import os

# Template storage
SHIPS_DIR = os.environ.get("BRASS_SHIPS_DIR", "res/ships")
TEMPLATE_EXTENSION = ".ship"
MAX_LOADED_TEMPLATES = 10  # Templates held in memory before FIFO eviction

# Round loop
TICK_DELAY = 1.0  # Seconds between rounds in the background loop
MAX_ROUNDS_PER_REQUEST = 100

# Spawning
DEFAULT_SPAWN_QUANTITY = 1

# API server
API_HOST = "0.0.0.0"
API_PORT = 8000
