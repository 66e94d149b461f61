"""Configuration settings for the metro planner."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DB_PATH = DATA_DIR / "metro_planner.db"
DATA_DIR.mkdir(parents=True, exist_ok=True)  # Ensure data directory exists

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH}")

# One <line>.txt file per line, rows of "<station> <cumulative metres>"
DATASETS_DIR = Path(os.getenv("METRO_DATASETS_DIR", PROJECT_ROOT / "datasets"))

# HTTP layer
PATH_CACHE_TTL_SECONDS = int(os.getenv("PATH_CACHE_TTL_SECONDS", "300"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Fare policy written when seeding a fresh store (minor units, i.e. paise)
DEFAULT_BASE_FARE = int(os.getenv("DEFAULT_BASE_FARE", "1000"))
DEFAULT_PER_KM_RATE = int(os.getenv("DEFAULT_PER_KM_RATE", "200"))
DEFAULT_INTERCHANGE_FEE = int(os.getenv("DEFAULT_INTERCHANGE_FEE", "500"))
