import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Service credential for the hosted database. Absent credentials are reported
# per request (500) rather than at import time.
DATABASE_URL = os.getenv("DATABASE_URL")

# OpenAI Configuration (AI suggestion endpoints)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "30"))

# Public base URL of this API, used by the cron trigger to reach the
# materialize endpoint the same way an external caller would
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")

# Calendar feed identity
CALENDAR_PRODID = os.getenv("CALENDAR_PRODID", "-//Lennin//TILSF//EN")
CALENDAR_UID_DOMAIN = os.getenv("CALENDAR_UID_DOMAIN", "tilsf")

# Opt-in idempotent materialization (per-seed high-water mark)
MATERIALIZE_TRACK_HIGH_WATER = os.getenv("MATERIALIZE_TRACK_HIGH_WATER", "false").lower() == "true"

# Frontend origins allowed by CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")
