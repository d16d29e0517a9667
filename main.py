"""
Break-in detector: scans an sshd authentication log for probable break-in attempts.
Main entry point.
"""

from breakin.alert_manager import AlertManager
from breakin.config import CONFIG, DB_CONFIG, is_db_configured
from breakin.db_connector import DatabaseConnector
from breakin.detector import BreakinDetector
from breakin.lookup import LookupLoadError, load_lookup
from breakin.summary import summarize_findings
from breakin.transport import TransportError, open_log_stream
import logging
import argparse
import sys

import psycopg2

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def setup_db_connection():
    """Initialize and return database connector if configured."""
    if is_db_configured():
        try:
            logger.info("Database configuration detected. Initializing connection...")
            db_connector = DatabaseConnector(
                host=DB_CONFIG["host"],
                port=DB_CONFIG["port"],
                database=DB_CONFIG["database"],
                user=DB_CONFIG["user"],
                password=DB_CONFIG["password"],
                ssl_mode=DB_CONFIG["ssl_mode"]
            )

            if db_connector.test_connection():
                logger.info("✓ Database connection successful")
                return db_connector
            else:
                logger.warning("Database connection test failed. Continuing without database.")
                db_connector.close()
                return None
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database: {e}")
            logger.warning("Continuing without database persistence.")
            return None
    return None

def build_detector(authorized_users_path, banned_ips_path, year):
    """Load both lookup lists and create a detector for one scan run."""
    authorized_users = load_lookup(authorized_users_path)
    banned_ips = load_lookup(banned_ips_path)
    return BreakinDetector(
        authorized_users=authorized_users,
        banned_ips=banned_ips,
        window_seconds=CONFIG["window_seconds"],
        max_close_pairs=CONFIG["max_close_pairs"],
        year=year
    )

def process_log_stream(locator, detector, alert_manager, timeout=30):
    """
    Scan the log behind ``locator`` and report every detection.

    Returns:
        List of reportable findings, in log order
    """
    logger.info(f"Scanning log: {locator}")

    reported = []
    for finding in detector.scan(open_log_stream(locator, timeout=timeout)):
        if finding.reportable:
            alert_manager.send_alert(finding)
            reported.append(finding)

    alert_manager.send_summary(detector.lines_processed, detector.detections)
    return reported

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Detect probable break-in attempts in an sshd authentication log"
    )
    parser.add_argument("locator", help="URL (http/https) or local path of the log capture")
    parser.add_argument("--authorized-users", default=CONFIG["authorized_users_path"],
                        help="File of authorized account tokens")
    parser.add_argument("--banned-ips", default=CONFIG["banned_ips_path"],
                        help="File of banned IP tokens")
    parser.add_argument("--year", type=int, default=CONFIG["log_year"],
                        help="Year assumed for log timestamps")
    parser.add_argument("-o", "--output", default=CONFIG["alert_output"],
                        help="Append detections to this CSV file")
    parser.add_argument("--breakdown", action="store_true",
                        help="Print a per-account breakdown after the summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Break-in detector starting...")

    try:
        detector = build_detector(args.authorized_users, args.banned_ips, args.year)
    except LookupLoadError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1

    db_connector = setup_db_connection()
    alert_manager = AlertManager(
        csv_output_path=args.output,
        db_connector=db_connector
    )

    try:
        reported = process_log_stream(
            args.locator, detector, alert_manager, timeout=CONFIG["request_timeout"]
        )
    except TransportError as e:
        logger.error(f"Transport error: {e}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    finally:
        if db_connector:
            db_connector.close()

    if args.breakdown:
        breakdown = summarize_findings(reported)
        if not breakdown.empty:
            print()
            print(breakdown.to_string(index=False))
        flagged = detector.flags.flagged_accounts()
        if flagged:
            print(f"Flagged accounts: {', '.join(flagged)}")

    if args.output and reported:
        logger.info(f"✓ Alerts saved to: {args.output}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
