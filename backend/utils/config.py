"""Configuration from environment."""
import os

TESTING = os.environ.get("TESTING") == "true"

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch production.
if TESTING:
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./charging.db",
    )

CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

# Fallback command cache: entries expire after TTL; oldest evicted past max size.
COMMAND_CACHE_TTL_S = float(os.environ.get("COMMAND_CACHE_TTL_S", "300"))
COMMAND_CACHE_MAX_ENTRIES = int(os.environ.get("COMMAND_CACHE_MAX_ENTRIES", "1024"))

# Session simulator
SIMULATOR_TICK_S = float(os.environ.get("SIMULATOR_TICK_S", "1.0"))
KWH_RATE = float(os.environ.get("KWH_RATE", "8"))

STOP_CHARGING_DELAY_S = float(os.environ.get("STOP_CHARGING_DELAY_S", "0.5"))

# Razorpay (payment orders)
RAZORPAY_KEY_ID = os.environ.get("RAZORPAY_KEY_ID", "")
RAZORPAY_KEY_SECRET = os.environ.get("RAZORPAY_KEY_SECRET", "")
RAZORPAY_API_URL = os.environ.get("RAZORPAY_API_URL", "https://api.razorpay.com/v1")
