"""
Virtual Coach AI — Report Handoff
The upload page stores the report it gets back and the report page reads it
later to ground questions. The server never keeps the report: /api/report
answers with handoff_payload(), and the caller keeps dump_report() of it
under LATEST_REPORT_KEY. load_report() is the reading side for callers and
tests; the round trip is lossless.
"""

import json
from typing import Optional

from report_schema import SwingReport, coerce_report

LATEST_REPORT_KEY = "vca-latest-report"


def handoff_payload(report: Optional[SwingReport]) -> Optional[dict]:
    """JSON-ready form of a report as sent to the caller."""
    if report is None:
        return None
    return report.to_payload()


def dump_report(report: SwingReport) -> str:
    """Serialized form the caller keeps under LATEST_REPORT_KEY."""
    return json.dumps(handoff_payload(report), ensure_ascii=False)


def load_report(raw: Optional[str]) -> Optional[SwingReport]:
    """Reads a stored report back; None when nothing usable is stored."""
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    report, _ = coerce_report(data)
    return report
