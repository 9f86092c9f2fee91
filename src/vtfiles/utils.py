# Helpers shared by the client and the command line

import string
from dataclasses import dataclass, field
from typing import List

GUI_FILE_URL = "https://www.virustotal.com/gui/file/"

_HEX = set(string.hexdigits)


def is_valid_hash(hash_str):
    """MD5 (32), SHA1 (40) or SHA256 (64) hex digest."""
    return len(hash_str) in (32, 40, 64) and all(c in _HEX for c in hash_str)


@dataclass(frozen=True)
class ReportSummary:
    sha256: str
    malicious: int
    suspicious: int
    total: int
    threat_names: List[str] = field(default_factory=list)
    link: str = ""


def summarize_report(report) -> ReportSummary:
    """Condense a FileReportResponse into the numbers people look at first.

    ``total`` counts engines that gave a verdict (malicious, suspicious,
    undetected, harmless); timeouts and unsupported types are left out.
    """
    attributes = report.data.attributes
    stats = attributes.last_analysis_stats
    total = stats.malicious + stats.suspicious + stats.undetected + stats.harmless

    threat_names = []
    for result in attributes.last_analysis_results.values():
        if result.category == "malicious" and result.result and result.result not in threat_names:
            threat_names.append(result.result)

    return ReportSummary(
        sha256=attributes.sha256,
        malicious=stats.malicious,
        suspicious=stats.suspicious,
        total=total,
        threat_names=threat_names,
        link=GUI_FILE_URL + attributes.sha256,
    )


def format_summary(summary: ReportSummary) -> str:
    lines = [f"Detections: {summary.malicious}/{summary.total}"]
    if summary.suspicious:
        lines.append(f"Suspicious: {summary.suspicious}")
    if summary.threat_names:
        lines.append(f"Main threat: {summary.threat_names[0]}")
        if len(summary.threat_names) > 1:
            lines.append(f"Other threats: {len(summary.threat_names) - 1} more")
    lines.append(f"SHA256: {summary.sha256}")
    lines.append(f"Report: {summary.link}")
    return "\n".join(lines)
