"""
Pytest configuration and fixtures for break-in detector tests.

This module provides reusable fixtures for testing all components.
"""

import pytest
import os
import tempfile
import shutil
from datetime import datetime, timedelta
from unittest.mock import Mock

from breakin.detector import BreakinDetector


AUTHORIZED_ACCOUNT = "12345"
BANNED_IP = "61.177.172.13"
BASE_TIME = datetime(2021, 6, 10, 3, 0, 0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def temp_csv_file(temp_dir):
    """Create a temporary CSV file path."""
    csv_path = os.path.join(temp_dir, "test_alerts.csv")
    yield csv_path
    # Cleanup handled by temp_dir fixture


@pytest.fixture
def auth_line():
    """
    Build an sshd log line ``offset`` seconds after BASE_TIME.

    Usage: auth_line(5, account="40001", failed=False, ip="10.0.0.50")
    """
    def _build(offset, account="40001", failed=True, ip="10.0.0.50"):
        stamp = (BASE_TIME + timedelta(seconds=offset)).strftime("%b %d %H:%M:%S")
        outcome = "Failed" if failed else "Accepted"
        return f"{stamp} ceclnx01 sshd[{account}]: {outcome} password for root from {ip} port 22 ssh2"
    return _build


@pytest.fixture
def sample_log_lines():
    """Provide sample sshd authentication log lines."""
    return [
        # Failed login attempts
        "Jun 10 03:32:36 ceclnx01 sshd[46819]: Failed password for root from 218.92.0.188 port 22 ssh2",
        "Jun 10 03:32:40 ceclnx01 sshd[46819]: Failed password for invalid user admin from 218.92.0.188 port 22 ssh2",

        # Successful login
        "Jun 10 03:33:00 ceclnx01 sshd[47001]: Accepted password for raodm from 10.0.0.50 port 22 ssh2",

        # Malformed entries
        "Jun 10 03:34:00 ceclnx01 cron[4242]: pam_unix(cron:session): session opened for user root",
        "Invalid log line without proper format",
    ]


@pytest.fixture
def lookup_files(temp_dir):
    """Write authorized user and banned IP lists; return their paths."""
    authorized_path = os.path.join(temp_dir, "authorized_users.txt")
    banned_path = os.path.join(temp_dir, "banned_ips.txt")

    with open(authorized_path, 'w') as f:
        f.write(f"{AUTHORIZED_ACCOUNT}\n23456 34567\n")
    with open(banned_path, 'w') as f:
        f.write(f"{BANNED_IP}\n218.92.0.191\n")

    return {"authorized": authorized_path, "banned": banned_path}


@pytest.fixture
def sample_capture_file(temp_dir, auth_line):
    """
    Raw capture: 2 header lines, a blank line, then 5 authentication lines.

    Line 3 of the body comes from a banned IP; nothing else is reportable.
    """
    capture_path = os.path.join(temp_dir, "capture.log")

    body = [
        auth_line(0, account="40001"),
        auth_line(60, account="40002", failed=False),
        auth_line(120, account="40003", ip=BANNED_IP),
        auth_line(180, account="40001", failed=False),
        auth_line(240, account="40004"),
    ]
    content = "HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\n" + "\n".join(body) + "\n"

    with open(capture_path, 'w', newline='') as f:
        f.write(content)

    yield capture_path


@pytest.fixture
def detector():
    """Detector with one authorized account and one banned IP."""
    return BreakinDetector(
        authorized_users={AUTHORIZED_ACCOUNT},
        banned_ips={BANNED_IP}
    )


@pytest.fixture
def mock_db_connector():
    """Create a mock DatabaseConnector for testing."""
    mock_db = Mock()

    # Mock successful operations
    mock_db.test_connection.return_value = True
    mock_db.insert_detection.return_value = 1  # Return detection ID
    mock_db.close.return_value = None

    return mock_db


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test."""
    # Store original env vars
    original_env = os.environ.copy()

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set mock environment variables for testing."""
    test_env = {
        'DB_HOST': 'test-host.example.com',
        'DB_PORT': '5432',
        'DB_NAME': 'test_db',
        'DB_USER': 'test_user',
        'DB_PASSWORD': 'test_password',
        'DB_SSL_MODE': 'require'
    }

    for key, value in test_env.items():
        monkeypatch.setenv(key, value)

    return test_env
