"""
Configuration module for the break-in detector.

Loads configuration from environment variables and provides default values.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Detection configuration
CONFIG = {
    "authorized_users_path": os.getenv("AUTHORIZED_USERS_FILE", "data/authorized_users.txt"),
    "banned_ips_path": os.getenv("BANNED_IPS_FILE", "data/banned_ips.txt"),
    # Syslog timestamps carry no year
    "log_year": int(os.getenv("LOG_YEAR", "2021")),
    "window_seconds": 20,
    "max_close_pairs": 2,
    "request_timeout": int(os.getenv("REQUEST_TIMEOUT", "30")),
    "alert_output": os.getenv("ALERT_OUTPUT")
}

# Database configuration (loaded from environment variables)
DB_CONFIG = {
    "host": os.getenv("DB_HOST"),
    "port": int(os.getenv("DB_PORT", "5432")),
    "database": os.getenv("DB_NAME"),
    "user": os.getenv("DB_USER"),
    "password": os.getenv("DB_PASSWORD"),
    "ssl_mode": os.getenv("DB_SSL_MODE", "require")
}

def is_db_configured() -> bool:
    """
    Check if database configuration is complete.

    Returns:
        bool: True if all required database credentials are present
    """
    required_keys = ["host", "database", "user", "password"]
    return all(DB_CONFIG.get(key) for key in required_keys)
