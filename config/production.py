import os

from .config import ATTENDANCE_TIMEZONE, LOG_LEVEL, MATCH_THRESHOLD, STORAGE_BACKEND, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

EXPOSE_ERROR_DETAILS = env_flag("EXPOSE_ERROR_DETAILS", "0")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
