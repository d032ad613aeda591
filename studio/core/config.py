from pathlib import Path
from dotenv import load_dotenv
import os


ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(ROOT_DIR / ".env")

MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "studio_db")

JWT_SECRET = os.getenv("JWT_SECRET", "studio-dev-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "24"))

# Scheduling
BOOKING_BUFFER_MINUTES = max(int(os.getenv("BOOKING_BUFFER_MINUTES", "0")), 0)
DEFAULT_CLASS_SESSION_MINUTES = int(os.getenv("DEFAULT_CLASS_SESSION_MINUTES", "90"))
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD").upper()

# External calendar
GOOGLE_CALENDAR_ID = os.getenv("GOOGLE_CALENDAR_ID")
GOOGLE_CALENDAR_ACCESS_TOKEN = os.getenv("GOOGLE_CALENDAR_ACCESS_TOKEN")
GOOGLE_CALENDAR_TZ = os.getenv("GOOGLE_CALENDAR_TZ", "UTC")
GOOGLE_CALENDAR_TIMEOUT_SECONDS = float(os.getenv("GOOGLE_CALENDAR_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
