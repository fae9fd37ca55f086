"""Application configuration and settings."""
import os
from dotenv import load_dotenv

# Load environment variables from .env (if present)
load_dotenv()

# Upstream records backend
UPSTREAM_API_BASE_URL = os.getenv("UPSTREAM_API_BASE_URL", "http://127.0.0.1:8000/api")
UPSTREAM_API_TIMEOUT = float(os.getenv("UPSTREAM_API_TIMEOUT", "30"))

# Reference data is cached for 5 minutes unless overridden
REFERENCE_DATA_CACHE_TTL = float(os.getenv("REFERENCE_DATA_CACHE_TTL", "300"))

# Logging
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Security configuration - REQUIRED, no default for security
ADMIN_API_KEY = os.environ.get("ADMIN_API_KEY")
if not ADMIN_API_KEY:
    raise ValueError(
        "ADMIN_API_KEY environment variable is required. "
        "Please set it in your .env file or environment variables."
    )
