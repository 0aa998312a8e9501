import os

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)

if REDIS_PASSWORD:
    REDIS_URL = f"redis://:{REDIS_PASSWORD}@{REDIS_HOST}:{REDIS_PORT}"
else:
    REDIS_URL = f"redis://{REDIS_HOST}:{REDIS_PORT}"

# Hash holding every room document, field = room code
REDIS_ROOMS_KEY = os.getenv("REDIS_ROOMS_KEY", "rooms")

# Weekly sweep, "every sunday 00:00" by default
SWEEP_ENABLED = os.getenv("SWEEP_ENABLED", "true").lower() == "true"
SWEEP_DAY_OF_WEEK = os.getenv("SWEEP_DAY_OF_WEEK", "sun")
SWEEP_HOUR = int(os.getenv("SWEEP_HOUR", 0))
SWEEP_MINUTE = int(os.getenv("SWEEP_MINUTE", 0))
SWEEP_TIMEZONE = os.getenv("SWEEP_TIMEZONE", "America/Los_Angeles")
