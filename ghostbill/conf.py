import os

# Calendar used for every date-only computation (next_date, month windows)
CALENDAR_TZ = os.getenv("CALENDAR_TZ", "UTC")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
MAX_FREE_TRANSACTIONS = int(os.getenv("MAX_FREE_TRANSACTIONS", 5))

DATABASE_URL = os.getenv(
    "DATABASE_URL", "sqlite:///./ghostbill.db"
)

POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 10))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 20))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", 30))
DB_LOG_ENABLED = bool(int(os.getenv("BACKEND_DB_LOG", 0)))

RECURRING_SWEEP_HOUR = int(os.getenv("RECURRING_SWEEP_HOUR", 0))
MISFIRE_GRACE_TIME = int(os.getenv("MISFIRE_GRACE_TIME", 3600))
