import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./cleaning.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 3001)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Identity provider (Supabase GoTrue)
    SUPABASE_URL = data.get("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = data.get("SUPABASE_ANON_KEY", "")
    SUPABASE_SERVICE_ROLE_KEY = data.get("SUPABASE_SERVICE_ROLE_KEY", "")
    SUPABASE_JWT_SECRET = data.get("SUPABASE_JWT_SECRET", "")

    # Payments
    STRIPE_SECRET_KEY = data.get("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET = data.get("STRIPE_WEBHOOK_SECRET", "")
    STRIPE_PRICE_ID_SOLO = data.get("STRIPE_PRICE_ID_SOLO", "")
    STRIPE_PRICE_ID_SMALL_TEAM = data.get("STRIPE_PRICE_ID_SMALL_TEAM", "")

    # Image storage
    IMAGEKIT_PRIVATE_KEY = data.get("IMAGEKIT_PRIVATE_KEY", "")
    IMAGEKIT_UPLOAD_URL = data.get(
        "IMAGEKIT_UPLOAD_URL", "https://upload.imagekit.io/api/v1/files/upload"
    )

    # Email (Resend)
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "CleanOps <noreply@cleanops.app>")

    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    HTTP_TIMEOUT_SECONDS = float(data.get("HTTP_TIMEOUT_SECONDS", 10))
    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))

    # Background sweeps
    ENABLE_SCHEDULER = bool(data.get("ENABLE_SCHEDULER", True))
    JOB_REMINDER_INTERVAL_SECONDS = int(data.get("JOB_REMINDER_INTERVAL_SECONDS", 3600))
    RECURRING_RENEWAL_HOUR = int(data.get("RECURRING_RENEWAL_HOUR", 2))
    PAYMENT_REMINDER_HOUR = int(data.get("PAYMENT_REMINDER_HOUR", 9))
