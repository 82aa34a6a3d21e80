import os

from .config import ATTENDANCE_TIMEZONE, LOG_LEVEL, MATCH_THRESHOLD, STORAGE_BACKEND, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True

# Storage errors include the driver message in responses.
EXPOSE_ERROR_DETAILS = env_flag("EXPOSE_ERROR_DETAILS", "1")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
