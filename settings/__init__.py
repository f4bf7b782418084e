"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("FINANCING_DB_PATH", "financing.duckdb")

# Logging
LOG_DIR = Path(os.getenv("FINANCING_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("FINANCING_LOG_LEVEL", "INFO")

# Analytics freshness (payers 5 min, providers 24 h, schemes 5 min)
PAYER_ANALYTICS_TTL_SECONDS = int(os.getenv("PAYER_ANALYTICS_TTL_SECONDS", "300"))
PROVIDER_ANALYTICS_TTL_SECONDS = int(os.getenv("PROVIDER_ANALYTICS_TTL_SECONDS", "86400"))
SCHEME_ANALYTICS_TTL_SECONDS = int(os.getenv("SCHEME_ANALYTICS_TTL_SECONDS", "300"))

# Analytics shape
TOP_LIMIT = int(os.getenv("ANALYTICS_TOP_LIMIT", "10"))
TREND_MONTHS = int(os.getenv("ANALYTICS_TREND_MONTHS", "12"))

# API
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
