import os
from dotenv import load_dotenv
import logging

# Load environment variables from .env file
load_dotenv()

# Configure logging
logger = logging.getLogger(__name__)

# Database configuration
DATABASE_NAME = os.getenv("MONGODB_DATABASE", "ProjectTracker")
DEFAULT_MONGODB_URI = "mongodb://localhost:27017"

# Checked in order; DATABASE_URL is shared with other services and may point elsewhere
MONGODB_URI_ENV_VARS = ("MONGODB_URI", "DATABASE_URL")


def mongo_uri_from_env(env=os.environ) -> str:
    """First set env var holding a mongodb:// or mongodb+srv:// URI, else localhost."""
    for name in MONGODB_URI_ENV_VARS:
        value = (env.get(name) or "").strip()
        if not value:
            continue
        if value.startswith(("mongodb://", "mongodb+srv://")):
            return value
        logger.warning(f"Ignoring {name}: not a MongoDB connection string")
    return DEFAULT_MONGODB_URI


MONGODB_CONNECTION_STRING = mongo_uri_from_env()

# Collections
PROJECT_COLLECTION = "project"
TASK_COLLECTION = "task"
EMPLOYEE_COLLECTION = "employee"

# Connection pool / timeouts (milliseconds)
MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "5000"))
MONGODB_MAX_POOL_SIZE: int = int(os.getenv("MONGODB_MAX_POOL_SIZE", "50"))
