"""
Break-in detection engine.

Combines the authorized user list, the banned IP list, the flag registry and
the per-account frequency tracker into a single verdict per log line.

Rules, first match wins:
    1. Line mentions an authorized user  -> clear
    2. Line mentions a banned IP         -> banned IP
    3. Account was flagged earlier       -> banned IP
    4. Account fails too frequently      -> frequency
    5. Otherwise                         -> clear
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from breakin.flag_registry import FlagRegistry
from breakin.frequency_tracker import FrequencyTracker
from breakin.log_parser import LogParser, ParsedLine

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    CLEAR = "clear"
    BANNED_IP = "banned-ip"
    FREQUENCY = "frequency-violation"


class Rule(str, Enum):
    AUTHORIZED = "authorized"
    BANNED_IP = "banned-ip"
    PREVIOUSLY_FLAGGED = "previously-flagged"
    FREQUENCY = "frequency"
    NO_MATCH = "no-match"
    UNPARSEABLE = "unparseable"


@dataclass
class Finding:
    """Verdict for one log line and the rule that produced it."""
    verdict: Verdict
    rule: Rule
    line: ParsedLine

    @property
    def reportable(self) -> bool:
        return self.verdict is not Verdict.CLEAR


class BreakinDetector:
    """
    Stateful per-run detector.

    Owns the frequency tracker and flag registry; both live exactly as long
    as this instance.
    """

    def __init__(
        self,
        authorized_users: Iterable[str],
        banned_ips: Iterable[str],
        window_seconds: int = 20,
        max_close_pairs: int = 2,
        year: int = 2021
    ):
        """
        Args:
            authorized_users: Account tokens exempt from every rule
            banned_ips: Address tokens that are always reported
            window_seconds: Largest gap between attempts still considered close
            max_close_pairs: Close pairs tolerated before a frequency violation
            year: Year assumed for log timestamps
        """
        self.authorized_users = frozenset(authorized_users)
        self.banned_ips = frozenset(banned_ips)
        self.parser = LogParser(year=year)
        self.tracker = FrequencyTracker(
            window_seconds=window_seconds,
            max_close_pairs=max_close_pairs
        )
        self.flags = FlagRegistry()
        self.lines_processed = 0
        self.detections = 0

    def is_authorized(self, line: str) -> bool:
        return any(user in line for user in self.authorized_users)

    def is_banned(self, line: str) -> bool:
        return any(ip in line for ip in self.banned_ips)

    def evaluate(self, parsed: ParsedLine) -> Finding:
        """Apply the rules to one parsed line, updating tracker and flags."""
        if self.is_authorized(parsed.raw):
            return Finding(Verdict.CLEAR, Rule.AUTHORIZED, parsed)

        if self.is_banned(parsed.raw):
            return self._report(Verdict.BANNED_IP, Rule.BANNED_IP, parsed)

        if parsed.account is None:
            logger.debug(f"Line {parsed.line_number} has no account field; skipping account rules")
            return Finding(Verdict.CLEAR, Rule.UNPARSEABLE, parsed)

        if self.flags.is_flagged(parsed.account):
            return self._report(Verdict.BANNED_IP, Rule.PREVIOUSLY_FLAGGED, parsed)

        if self.tracker.report_attempt(parsed.account, parsed.timestamp, parsed.failed):
            return self._report(Verdict.FREQUENCY, Rule.FREQUENCY, parsed)

        return Finding(Verdict.CLEAR, Rule.NO_MATCH, parsed)

    def evaluate_line(self, line: str, line_number: int = 0) -> Finding:
        return self.evaluate(self.parser.parse_auth_log_line(line, line_number))

    def _report(self, verdict: Verdict, rule: Rule, parsed: ParsedLine) -> Finding:
        if parsed.account is not None:
            self.flags.flag(parsed.account)
        logger.debug(f"Line {parsed.line_number}: {verdict.value} ({rule.value})")
        return Finding(verdict, rule, parsed)

    def scan(self, lines: Iterable[str]) -> Iterator[Finding]:
        """
        Evaluate a raw log stream line by line.

        The header block (everything up to and including the first blank
        line) is discarded. Scanning stops at the end of the stream or at the
        next blank line. A finding is yielded for every scanned line.
        """
        stream = iter(lines)
        skip_header(stream)

        for line in stream:
            line = line.rstrip("\n")
            if not line:
                break
            self.lines_processed += 1
            finding = self.evaluate_line(line, self.lines_processed)
            if finding.reportable:
                self.detections += 1
            yield finding

        logger.info(
            f"Scan finished: {self.lines_processed} lines, "
            f"{self.detections} possible hacking attempts"
        )


def skip_header(stream: Iterator[str]) -> int:
    """Consume header lines up to and including the first blank line."""
    skipped = 0
    for header in stream:
        header = header.rstrip("\n")
        if not header or header == "\r":
            break
        skipped += 1
    logger.debug(f"Skipped {skipped} header lines")
    return skipped
