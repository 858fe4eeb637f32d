from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
DB_PATH = DATA_DIR / "venuedesk.db"
UPLOAD_DIR = DATA_DIR / "uploads"


class Config:
    SECRET_KEY = os.environ.get("VENUEDESK_SECRET", "dev-secret")
    DB_PATH = os.environ.get("VENUEDESK_DB", str(DB_PATH))
    UPLOAD_DIR = os.environ.get("VENUEDESK_UPLOAD_DIR", str(UPLOAD_DIR))
    MAX_CONNECTIONS = int(os.environ.get("VENUEDESK_MAX_CONNECTIONS", "20"))
    CONNECT_TIMEOUT = float(os.environ.get("VENUEDESK_CONNECT_TIMEOUT", "5.0"))
    CALENDAR_TZ = os.environ.get("VENUEDESK_TZ", "UTC")
    DEBUG = os.environ.get("VENUEDESK_DEBUG", "").lower() in {"1", "true", "yes"}
