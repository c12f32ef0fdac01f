import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_timekeeping_test"),
}

STORAGE = os.getenv("STORAGE", "memory")

# Roster for memory storage: (worker_id, full_name).
WORKERS = [(1, "Ana Ruiz"), (2, "Ben Okafor"), (3, "Cy Tran")]

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_HOURLY_RATE = 20.0

AUTO_INIT_DB = False
