import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_timekeeping"),
}

STORAGE = os.getenv("STORAGE", "mysql")

# Roster for memory storage: (worker_id, full_name). Empty accepts any worker id.
WORKERS = []

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_HOURLY_RATE = float(os.getenv("DEFAULT_HOURLY_RATE", "15.0"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
