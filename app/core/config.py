import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Configuration
APP_NAME = os.getenv("APP_NAME", "LocalMeat")
RESOURCE_DIR = Path(os.getenv("RESOURCE_DIR", Path(__file__).resolve().parent.parent / "resources"))
LOAD_RESOURCES = os.getenv("LOAD_RESOURCES", "true").lower() in ("1", "true", "yes")
DEFAULT_LOCATION = os.getenv("DEFAULT_LOCATION", "California")
FALLBACK_USER_NAME = os.getenv("FALLBACK_USER_NAME", "User")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000").split(",")
    if origin.strip()
]
