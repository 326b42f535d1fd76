import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

RECORDS_CONFIG = {
    "base_url": os.getenv("CLASSCHARTS_BASE_URL", "https://www.classcharts.com/apiv2student"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
}

# "Remember me" keeps the credential cookies for this many days
REMEMBER_ME_DAYS = int(os.getenv("REMEMBER_ME_DAYS", "30"))
SESSION_PING_SECONDS = int(os.getenv("SESSION_PING_SECONDS", "240"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "3000"))

DEBUG = True
