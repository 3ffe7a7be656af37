import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./eventflow.db")

# Firebase Configuration (identity provider)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Frontend base URL for notification deep-links
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")

# Booking workflow
# When enabled, admins may only move a booking along the forward graph
# (see domain/bookings/state_machine.py). Disabled keeps any-to-any selection.
STRICT_BOOKING_TRANSITIONS = os.getenv("STRICT_BOOKING_TRANSITIONS", "false").lower() == "true"
BOOKING_PAGE_SIZE = int(os.getenv("BOOKING_PAGE_SIZE", "20"))
ACTIVITY_FEED_LIMIT = int(os.getenv("ACTIVITY_FEED_LIMIT", "15"))

# Live updates
# Pending change events per socket before a slow reader is disconnected
LIVE_QUEUE_SIZE = int(os.getenv("LIVE_QUEUE_SIZE", "100"))

# Redis (rating cache + rate limiting)
REDIS_ENABLED = os.getenv("REDIS_ENABLED", "true").lower() == "true"
RATING_CACHE_TTL = int(os.getenv("RATING_CACHE_TTL", "300"))
