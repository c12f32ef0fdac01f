import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_timekeeping"),
}

# "mysql" or "memory" (in-process store, data lost on restart)
STORAGE = os.getenv("STORAGE", "mysql")

# Roster for memory storage: (worker_id, full_name). Empty accepts any worker id.
WORKERS = []

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Pass-through rate for payroll estimates until a wage source is wired.
DEFAULT_HOURLY_RATE = float(os.getenv("DEFAULT_HOURLY_RATE", "15.0"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
