import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "school.db"))
APP_ENV = os.getenv("APP_ENV", "production").strip().lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SCHOOL_NAME = os.getenv("SCHOOL_NAME", "GYAN SCHOOL")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

# Missing result for a scheduled subject counts as a failed subject
STRICT_MISSING_AS_FAIL = os.getenv("STRICT_MISSING_AS_FAIL", "").strip().lower() in ("1", "true", "yes")

# "raise" surfaces malformed/unscheduled results, "drop" logs and skips them
_default_error_mode = "raise" if APP_ENV in ("development", "test") else "drop"
REPORT_ERROR_MODE = os.getenv("REPORT_ERROR_MODE", _default_error_mode).strip().lower()
if REPORT_ERROR_MODE not in ("raise", "drop"):
    raise RuntimeError(f"REPORT_ERROR_MODE must be 'raise' or 'drop', got '{REPORT_ERROR_MODE}'")

# Roll number used for ordering students that don't have one
ROLL_SENTINEL = 9999
