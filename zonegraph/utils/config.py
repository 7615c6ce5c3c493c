# zonegraph/utils/config.py

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Project Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_PATH = PROJECT_ROOT / "data"
LOGS_PATH = PROJECT_ROOT / "logs"

# Neo4j connection (NEO4J_USERNAME kept for older .env files)
NEO4J_URI = os.getenv("NEO4J_URI")
NEO4J_USER = os.getenv("NEO4J_USER") or os.getenv("NEO4J_USERNAME") or "neo4j"
NEO4J_PASSWORD = os.getenv("NEO4J_PASSWORD")
NEO4J_DATABASE = os.getenv("NEO4J_DATABASE", "neo4j")

# Source data
CSV_PATH = Path(os.getenv("ZONEGRAPH_CSV_PATH", str(DATA_PATH / "urban_planning_data.csv")))

# Fixed question for this revision
QUERY_ZONE = "Scottsdale"
QUESTION = f"What are the utilities serving buildings in {QUERY_ZONE}?"

# Logging
LOG_FILE = os.getenv("ZONEGRAPH_LOG_FILE")

# Debug
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"


def validate_neo4j_config() -> List[str]:
    """Return the names of required Neo4j settings that are not set."""
    missing = []
    if not NEO4J_URI:
        missing.append("NEO4J_URI")
    if not NEO4J_USER:
        missing.append("NEO4J_USER")
    if not NEO4J_PASSWORD:
        missing.append("NEO4J_PASSWORD")
    return missing
