import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "porter_db_test"),
}
DB_POOL_SIZE = 2

JWT_ACCESS_SECRET = "test-access-secret"
JWT_REFRESH_SECRET = "test-refresh-secret"
JWT_ACCESS_EXPIRES_MINUTES = 15
JWT_REFRESH_EXPIRES_DAYS = 7

ALLOW_ROLE_ON_REGISTER = True

PDF_TEMPLATE_PATH = ""
PDF_BROWSER_ARGS = ["--no-sandbox"]

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
PORT = 5000

AUTO_INIT_DB = False
AUTO_SEED_DB = False

SEED_ADMIN_NAME = "Administrator"
SEED_ADMIN_EMAIL = "admin@example.com"
SEED_ADMIN_PASSWORD = "admin123"
