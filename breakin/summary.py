"""
Per-account breakdown of a finished scan.
"""

from typing import Iterable

import pandas as pd

from breakin.detector import Finding

COLUMNS = [
    "account", "verdict", "rule", "detections",
    "first_line", "last_line", "first_seen", "last_seen",
]


def findings_to_frame(findings: Iterable[Finding]) -> pd.DataFrame:
    """One row per reportable finding."""
    records = [
        {
            "line_number": f.line.line_number,
            "timestamp": pd.to_datetime(f.line.timestamp, unit="s"),
            "account": f.line.account,
            "verdict": f.verdict.value,
            "rule": f.rule.value,
        }
        for f in findings if f.reportable
    ]
    if not records:
        return pd.DataFrame(columns=["line_number", "timestamp", "account", "verdict", "rule"])
    return pd.DataFrame(records)


def summarize_findings(findings: Iterable[Finding]) -> pd.DataFrame:
    """
    Count detections per account, verdict and rule.

    Returns:
        DataFrame with columns account, verdict, rule, detections,
        first_line, last_line, first_seen, last_seen; sorted by detections (descending)
    """
    df = findings_to_frame(findings)
    if df.empty:
        return pd.DataFrame(columns=COLUMNS)

    df["account"] = df["account"].fillna("-")
    grouped = (
        df.groupby(["account", "verdict", "rule"])
        .agg(
            detections=("line_number", "size"),
            first_line=("line_number", "min"),
            last_line=("line_number", "max"),
            first_seen=("timestamp", "min"),
            last_seen=("timestamp", "max"),
        )
        .reset_index()
    )
    return grouped.sort_values(
        ["detections", "first_line"], ascending=[False, True]
    ).reset_index(drop=True)[COLUMNS]
