import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./homecare.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Frontend base URL, allowed by CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Consents expiring within this many days are flagged EXPIRING_SOON
CONSENT_EXPIRY_WARNING_DAYS = int(os.getenv("CONSENT_EXPIRY_WARNING_DAYS", "30"))

# Number of recent treatment records embedded in patient/practitioner detail responses
RECENT_TREATMENTS_LIMIT = int(os.getenv("PATIENT_RECENT_TREATMENTS", "5"))
