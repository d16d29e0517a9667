"""
Unit tests for the per-account scan breakdown.
"""

import pandas as pd

from breakin.summary import COLUMNS, findings_to_frame, summarize_findings


BANNED_IP = "61.177.172.13"


def scan_findings(detector, lines):
    return list(detector.scan([""] + lines))


class TestSummarizeFindings:

    def test_empty(self):
        df = summarize_findings([])
        assert df.empty
        assert list(df.columns) == COLUMNS

    def test_clear_findings_ignored(self, detector, auth_line):
        findings = scan_findings(detector, [auth_line(0), auth_line(100)])
        assert summarize_findings(findings).empty

    def test_counts_per_account_and_rule(self, detector, auth_line):
        lines = [auth_line(t, account="40001") for t in (0, 5, 10, 15, 20)]
        lines += [auth_line(30, account="40002", ip=BANNED_IP),
                  auth_line(40, account="40002", failed=False)]
        df = summarize_findings(scan_findings(detector, lines))

        assert list(df.columns) == COLUMNS
        rows = {(r.account, r.rule): r for r in df.itertuples()}

        # 4th line trips frequency, 5th is reported because the account is flagged
        assert rows[("40001", "frequency")].detections == 1
        assert rows[("40001", "frequency")].first_line == 4
        assert rows[("40001", "previously-flagged")].detections == 1
        assert rows[("40002", "banned-ip")].verdict == "banned-ip"
        assert rows[("40002", "previously-flagged")].last_line == 7
        assert df["detections"].sum() == detector.detections

    def test_sorted_by_detections(self, detector, auth_line):
        lines = [auth_line(0, account="40002", ip=BANNED_IP)]
        lines += [auth_line(t, account="40002", failed=False) for t in (100, 200, 300)]
        lines += [auth_line(400, account="40003", ip=BANNED_IP)]
        df = summarize_findings(scan_findings(detector, lines))

        assert df.iloc[0]["account"] == "40002"
        assert df.iloc[0]["rule"] == "previously-flagged"
        assert df.iloc[0]["detections"] == 3

    def test_missing_account_shown_as_dash(self, detector):
        findings = scan_findings(detector, [f"Jun 10 03:00:00 host kernel: probe from {BANNED_IP}"])
        df = summarize_findings(findings)
        assert df.iloc[0]["account"] == "-"


class TestFindingsToFrame:

    def test_timestamps_converted(self, detector, auth_line):
        findings = scan_findings(detector, [auth_line(0, ip=BANNED_IP)])
        df = findings_to_frame(findings)

        assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])
        assert df.iloc[0]["timestamp"] == pd.Timestamp("2021-06-10 03:00:00")

    def test_first_and_last_seen(self, detector, auth_line):
        lines = [auth_line(0, account="40002", ip=BANNED_IP)]
        lines += [auth_line(t, account="40002", failed=False) for t in (100, 200, 300)]
        df = summarize_findings(scan_findings(detector, lines))

        row = df[df["rule"] == "previously-flagged"].iloc[0]
        assert row["first_seen"] == pd.Timestamp("2021-06-10 03:01:40")
        assert row["last_seen"] == pd.Timestamp("2021-06-10 03:05:00")
