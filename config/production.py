import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))

ACTIVITY_FEED_LIMIT = int(os.getenv("ACTIVITY_FEED_LIMIT", "50"))
