#!/usr/bin/env python3
"""
Setup script to create a .env file for the break-in detector.
Run this once, then fill in the database credentials if you want detections stored.
"""

import os

def create_env_file():
    """Create .env file with lookup paths and (empty) database settings."""
    env_path = os.path.join(os.path.dirname(__file__), '..', '.env')

    if os.path.exists(env_path):
        print(f"✓ .env already exists at: {env_path} (left unchanged)")
        return True

    env_content = """# Configuration for the break-in detector

# Lookup lists
AUTHORIZED_USERS_FILE=data/authorized_users.txt
BANNED_IPS_FILE=data/banned_ips.txt

# Year assumed for syslog timestamps
LOG_YEAR=2021
REQUEST_TIMEOUT=30

# Optional CSV alert log
# ALERT_OUTPUT=data/processed/alerts.csv

# Optional PostgreSQL sink for detections
DB_HOST=
DB_PORT=5432
DB_NAME=
DB_USER=
DB_PASSWORD=
DB_SSL_MODE=require
"""

    try:
        with open(env_path, 'w') as f:
            f.write(env_content)
        print(f"✓ Created .env file at: {env_path}")
        print("\nYou can now run:")
        print("  python scripts/simulate_attack.py           # Write a sample capture")
        print("  python main.py data/raw/sample_capture.log  # Scan it")
        return True
    except OSError as e:
        print(f" Error creating .env file: {e}")
        return False

if __name__ == "__main__":
    create_env_file()
