import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "porter_db"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))

JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "dev-access-secret")
JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "dev-refresh-secret")
JWT_ACCESS_EXPIRES_MINUTES = int(os.getenv("JWT_ACCESS_EXPIRES_MINUTES", "15"))
JWT_REFRESH_EXPIRES_DAYS = int(os.getenv("JWT_REFRESH_EXPIRES_DAYS", "7"))

# Self-registration may pick a role (Admin/Supervisor/Viewer) in development.
ALLOW_ROLE_ON_REGISTER = bool(int(os.getenv("ALLOW_ROLE_ON_REGISTER", "1")))

PDF_TEMPLATE_PATH = os.getenv("PDF_TEMPLATE_PATH", "")
PDF_BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "5000"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Bootstrap Admin account written by AUTO_SEED_DB and scripts/seed_db.py
SEED_ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "Administrator")
SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
