import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "groupware_test"),
}

RP_ID = "localhost"
RP_NAME = "그룹웨어"
WEBAUTHN_TIMEOUT_MS = 60000

HOLIDAY_COUNTRY = "KR"
SESSION_DAYS = 7
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
