# core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///greatwok.db")

JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

RATE_LIMIT_MAX = int(os.getenv("RATE_LIMIT_MAX", "100"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))

GCS_PROJECT_ID = os.getenv("GCS_PROJECT_ID")
GCS_CLIENT_EMAIL = os.getenv("GCS_CLIENT_EMAIL")
GCS_PRIVATE_KEY = (os.getenv("GCS_PRIVATE_KEY") or "").replace("\\n", "\n")
GCS_BUCKET_NAME = os.getenv("GCS_BUCKET_NAME")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@greatwok.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# consumed by the flet client
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
