"""Application configuration constants."""

from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()

from datetime import timezone
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

# Database
DB_NAME = os.getenv("DB_NAME", "speakmate.db")
DB_PATH = str(BASE_DIR / DB_NAME)

TIMEZONE = timezone.utc

# Results store policy
MAX_STORED_RESULTS: int = int(os.getenv("MAX_STORED_RESULTS", "50"))
RESULT_RETENTION_MONTHS: int = int(os.getenv("RESULT_RETENTION_MONTHS", "6"))
DEFAULT_RECENT_LIMIT: int = int(os.getenv("DEFAULT_RECENT_LIMIT", "10"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# API Server
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RELOAD = os.getenv("API_RELOAD", "True").lower() in ("true", "1", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
