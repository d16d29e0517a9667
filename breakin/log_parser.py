"""
Parser for single-line sshd authentication records.

Example record:
    Jun 10 03:32:36 ceclnx01 sshd[46819]: Failed password for root from 218.92.0.188 port 22 ssh2

Only three things are pulled out of a line: the leading timestamp, the
5-character account field following the ``sshd`` marker, and whether the
line reports a failed attempt.
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

SERVICE_MARKER = "sshd"
FAILURE_MARKER = "Failed"
ACCOUNT_WIDTH = 5

TIMESTAMP_PATTERN = re.compile(r"^(\w{3}\s+\d{1,2}\s+\d{1,2}:\d{2}:\d{2})")
# Marker, one delimiter character (usually "["), then the fixed-width field
ACCOUNT_PATTERN = re.compile(
    re.escape(SERVICE_MARKER) + r".(?P<account>.{1,%d})" % ACCOUNT_WIDTH
)


@dataclass
class ParsedLine:
    """One authentication record, as seen by the detector."""
    timestamp: int
    account: Optional[str]
    failed: bool
    raw: str
    line_number: int = 0


def to_seconds(timestamp: str, year: int = 2021) -> int:
    """
    Convert a syslog timestamp such as "Jun 10 03:32:36" to seconds since
    the Unix epoch (UTC), under the given year.

    Returns 0 when the timestamp cannot be parsed.
    """
    try:
        parsed = datetime.strptime(f"{year} {timestamp.strip()}", "%Y %b %d %H:%M:%S")
    except ValueError:
        logger.debug(f"Unparseable timestamp: {timestamp!r}")
        return 0
    return calendar.timegm(parsed.timetuple())


class LogParser:
    def __init__(self, year: int = 2021):
        self.year = year

    def parse_timestamp(self, line: str) -> int:
        # Whole HH:MM:SS field, seconds digit included; a fixed 14 character
        # prefix would drop it and change which attempts count as close pairs
        match = TIMESTAMP_PATTERN.match(line)
        if not match:
            logger.debug(f"No timestamp prefix on line: {line!r}")
            return 0
        return to_seconds(match.group(1), self.year)

    def parse_account(self, line: str) -> Optional[str]:
        """Return the account field after the service marker, or None if absent."""
        match = ACCOUNT_PATTERN.search(line)
        if not match:
            return None
        return match.group("account")

    def parse_auth_log_line(self, line: str, line_number: int = 0) -> ParsedLine:
        """
        Parse one raw log line.

        Malformed lines never raise: the account is None when the service
        marker is missing and the timestamp falls back to 0.
        """
        line = line.rstrip("\r\n")
        return ParsedLine(
            timestamp=self.parse_timestamp(line),
            account=self.parse_account(line),
            failed=FAILURE_MARKER in line,
            raw=line,
            line_number=line_number,
        )
