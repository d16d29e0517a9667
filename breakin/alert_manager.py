"""
Alert management module for the break-in detector.

Handles alert distribution to multiple outputs: console, CSV, and database.
"""

import csv
import os
import logging
from typing import Optional, Any, TextIO
from datetime import datetime, timezone
from pathlib import Path

from breakin.detector import Finding, Verdict

logger = logging.getLogger(__name__)

REPORT_REASONS = {
    Verdict.BANNED_IP: "banned IP",
    Verdict.FREQUENCY: "frequency",
}

CSV_HEADERS = ['timestamp', 'account', 'verdict', 'rule', 'line']


def format_alert(finding: Finding) -> str:
    """Console report line for a reportable finding."""
    return f"Hacking due to {REPORT_REASONS[finding.verdict]}. Line: {finding.line.raw}"


def format_summary(lines_processed: int, detections: int) -> str:
    return f"Processed {lines_processed} lines. Found {detections} possible hacking attempts."


class AlertManager:
    """
    Manages break-in alerts with multi-channel output support.

    Supports console output, CSV logging, and optional database persistence.
    """

    def __init__(
        self,
        csv_output_path: Optional[str] = None,
        db_connector: Optional[Any] = None,
        stream: Optional[TextIO] = None
    ):
        """
        Initialize AlertManager with optional CSV and database outputs.

        Args:
            csv_output_path: Path to CSV file for alert logging
            db_connector: DatabaseConnector instance for database persistence
            stream: Console stream for report lines (default: sys.stdout at call time)
        """
        self.csv_output_path = csv_output_path
        self.db_connector = db_connector
        self.stream = stream
        self.alerts_sent = 0

        if self.csv_output_path:
            self._initialize_csv()

        logger.info("AlertManager initialized:")
        logger.info("  - Console output: Enabled")
        logger.info(f"  - CSV output: {'Enabled' if csv_output_path else 'Disabled'}")
        logger.info(f"  - Database output: {'Enabled' if db_connector else 'Disabled'}")

    def _initialize_csv(self) -> None:
        """
        Create CSV file with headers if it doesn't exist.
        """
        try:
            csv_dir = os.path.dirname(self.csv_output_path)
            if csv_dir:
                Path(csv_dir).mkdir(parents=True, exist_ok=True)

            file_exists = os.path.exists(self.csv_output_path)
            file_has_content = file_exists and os.path.getsize(self.csv_output_path) > 0

            if not file_has_content:
                with open(self.csv_output_path, 'w', newline='') as csvfile:
                    writer = csv.writer(csvfile)
                    writer.writerow(CSV_HEADERS)
                logger.info(f"CSV file initialized: {self.csv_output_path}")
        except OSError as e:
            logger.error(f"Error initializing CSV file: {e}")

    def _print(self, message: str) -> None:
        print(message, file=self.stream)

    def send_alert(self, finding: Finding) -> None:
        """
        Send a reportable finding to all configured outputs.

        Args:
            finding: Finding whose verdict is not clear
        """
        if not finding.reportable:
            return

        # 1. Console output (always enabled)
        self._print(format_alert(finding))
        self.alerts_sent += 1

        detection_time = datetime.fromtimestamp(finding.line.timestamp, tz=timezone.utc)

        # 2. CSV output (if configured)
        if self.csv_output_path:
            self.log_to_csv(finding, detection_time)

        # 3. Database output (if configured)
        if self.db_connector:
            self.log_to_database(finding, detection_time)

    def send_summary(self, lines_processed: int, detections: int) -> None:
        self._print(format_summary(lines_processed, detections))

    def log_to_csv(self, finding: Finding, detection_time: datetime) -> bool:
        """
        Log alert to CSV file.

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            with open(self.csv_output_path, 'a', newline='') as csvfile:
                writer = csv.writer(csvfile)
                writer.writerow([
                    detection_time.isoformat(),
                    finding.line.account or '',
                    finding.verdict.value,
                    finding.rule.value,
                    finding.line.raw
                ])
            logger.debug(f"Alert logged to CSV: line {finding.line.line_number}")
            return True
        except OSError as e:
            logger.error(f"Error writing to CSV: {e}")
            return False

    def log_to_database(self, finding: Finding, detection_time: datetime) -> Optional[int]:
        """
        Log alert to database.

        Returns:
            int: Detection ID if successful, None otherwise
        """
        detection_id = self.db_connector.insert_detection(
            detection_time=detection_time,
            account=finding.line.account,
            verdict=finding.verdict.value,
            rule=finding.rule.value,
            raw_line=finding.line.raw
        )
        if detection_id:
            logger.debug(f"Alert logged to database with ID: {detection_id}")
        return detection_id
