import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

RECORDS_CONFIG = {
    "base_url": os.getenv("CLASSCHARTS_BASE_URL", "https://www.classcharts.com/apiv2student"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
}

REMEMBER_ME_DAYS = int(os.getenv("REMEMBER_ME_DAYS", "30"))
SESSION_PING_SECONDS = int(os.getenv("SESSION_PING_SECONDS", "240"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3000"))

DEBUG = False
