"""Settings shared by every environment module."""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "face_attendance"),
    }


# Maximum Euclidean distance accepted as a face match (lower = stricter).
MATCH_THRESHOLD = float(os.getenv("MATCH_THRESHOLD", "0.6"))

# IANA zone for day buckets, e.g. "Asia/Kolkata". Empty = server local time.
ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "")

# "mysql" or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
