import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Load the demo restaurant (departments, staff, a week of shifts) on startup
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))

# Default size of GET /api/activities when no ?limit is given (empty = everything)
ACTIVITY_FEED_LIMIT = int(os.getenv("ACTIVITY_FEED_LIMIT")) if os.getenv("ACTIVITY_FEED_LIMIT") else None
