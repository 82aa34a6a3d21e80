import os

from .config import ATTENDANCE_TIMEZONE, MATCH_THRESHOLD, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

DEBUG = False
TESTING = True

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
LOG_LEVEL = "WARNING"

EXPOSE_ERROR_DETAILS = True

AUTO_INIT_DB = False
