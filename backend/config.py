"""
FEAST Recipe Tools Configuration
"""

import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Spoonacular API Configuration
SPOONACULAR_API_KEY = os.getenv("SPOONACULAR_API_KEY", "")
SPOONACULAR_BASE_URL = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
SPOONACULAR_TIMEOUT = float(os.getenv("SPOONACULAR_TIMEOUT", "30"))
SPOONACULAR_MAX_RETRIES = int(os.getenv("SPOONACULAR_MAX_RETRIES", "3"))
SPOONACULAR_RETRY_DELAY = float(os.getenv("SPOONACULAR_RETRY_DELAY", "1.0"))
SPOONACULAR_CACHE_TTL = int(os.getenv("SPOONACULAR_CACHE_TTL", "300"))  # 5 minutes

# Search Settings
CANDIDATE_POOL_SIZE = int(os.getenv("CANDIDATE_POOL_SIZE", "10"))  # candidates fetched per search
DEFAULT_MAX_RESULTS = int(os.getenv("DEFAULT_MAX_RESULTS", "10"))
DEFAULT_MIN_MATCH_PERCENTAGE = float(os.getenv("DEFAULT_MIN_MATCH_PERCENTAGE", "50"))

# Favorites
MAX_FAVORITES_PER_USER = int(os.getenv("MAX_FAVORITES_PER_USER", "500"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS - Frontend URLs
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    os.getenv("FRONTEND_URL", ""),  # Production frontend URL
]
# Filter empty strings
CORS_ORIGINS = [origin for origin in CORS_ORIGINS if origin]


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
