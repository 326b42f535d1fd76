SECRET_KEY = "test-secret"

RECORDS_CONFIG = {
    "base_url": "http://records.invalid/apiv2student",
    "timeout": 1.0,
}

REMEMBER_ME_DAYS = 30
SESSION_PING_SECONDS = 240

LOG_LEVEL = "WARNING"
PORT = 3000

DEBUG = False
TESTING = True
