SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

SEED_DEMO_DATA = False

ACTIVITY_FEED_LIMIT = None
