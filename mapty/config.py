"""Configuration: env, storage location, API, notification timings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of mapty package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so MAPTY_* overrides are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = BASE_DIR / "data"
STORAGE_PATH = Path(os.getenv("MAPTY_STORAGE_PATH", str(DATA_DIR / "storage.json")))
# Key the workout list is stored under in the key-value file
STORAGE_KEY = os.getenv("MAPTY_STORAGE_KEY", "workouts")

# API
API_HOST = os.getenv("MAPTY_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("MAPTY_API_PORT", "8000"))
# Browser UI origin allowed by CORS (empty = any)
MAPTY_WEB_ORIGIN = os.getenv("MAPTY_WEB_ORIGIN", "")

# Notifications: visible for 4 s, then 0.5 s hide transition before clearing
NOTIFICATION_VISIBLE_SEC = float(os.getenv("MAPTY_NOTIFICATION_VISIBLE_SEC", "4.0"))
NOTIFICATION_TRANSITION_SEC = float(os.getenv("MAPTY_NOTIFICATION_TRANSITION_SEC", "0.5"))

# Map view handed to the renderer
MAP_ZOOM_LEVEL = int(os.getenv("MAPTY_MAP_ZOOM_LEVEL", "13"))


def ensure_data_dir() -> None:
    STORAGE_PATH.parent.mkdir(parents=True, exist_ok=True)
