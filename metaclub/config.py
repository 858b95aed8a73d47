import os
import secrets
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/metaclub.db")

# Security
SECRET_KEY = os.getenv("SECRET_KEY", secrets.token_hex(32))
JWT_ALGORITHM = "HS256"
ADMIN_COOKIE_NAME = "admin_token"
ADMIN_TOKEN_EXPIRE_MINUTES = int(os.getenv("ADMIN_TOKEN_EXPIRE_MINUTES", "60"))

# Admin credentials (no default, login is disabled until one is set)
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

# Pricing and tickets
BASE_PRICE = int(os.getenv("BASE_PRICE", "170"))
TICKET_PREFIX = os.getenv("TICKET_PREFIX", "MVS")
TICKET_YEAR = int(os.getenv("TICKET_YEAR", "2025"))
DEFAULT_EVENT_ID = "1"

# Uploads
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(BASE_DIR / "uploads")))
UPLOAD_URL_PREFIX = "/uploads"

# Email
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", os.getenv("EMAIL_USER"))
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", os.getenv("EMAIL_PASS"))
EMAIL_FROM = os.getenv("EMAIL_FROM", SMTP_USER)
EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "Metaverse Club Admin")

# Templates
TEMPLATES_DIR = BASE_DIR / "metaclub" / "templates"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS (comma-separated; "*" reflects any origin)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
