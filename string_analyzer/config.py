import os
from dotenv import load_dotenv

load_dotenv()

# ------------------------------------------------------------------------------
# STORAGE
# ------------------------------------------------------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./strings.db")

# "sql" persists through SQLAlchemy, "memory" keeps everything in-process
STORE_BACKEND = os.getenv("STORE_BACKEND", "sql").lower()

# ------------------------------------------------------------------------------
# PAGINATION
# ------------------------------------------------------------------------------

DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", 25))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", 100))

# ------------------------------------------------------------------------------
# SERVER
# ------------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8000))
