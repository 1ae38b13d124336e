"""
HAProxy Log Parser
Turns journal lines of the HAProxy unit into timestamped, leveled entries
"""

import re
from datetime import datetime
from typing import Dict, List, Optional

# Checked in order, first match wins
LEVEL_KEYWORDS = (
    ("error", ("error", "err", "emerg")),
    ("warning", ("warning", "warn")),
)
DEFAULT_LEVEL = "info"

SYSLOG_TIMESTAMP_FORMAT = "%b %d %H:%M:%S"

PATTERNS = {
    # Jan 15 10:30:00
    'timestamp': re.compile(r'^([A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})'),

    # Jan 15 10:30:00 lb01 haproxy[1234]: message
    'preamble': re.compile(
        r'^[A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2}\s+\S+\s+[^\s:]+(?:\[\d+\])?:\s?(.*)$'
    ),

    # -- No entries -- / -- Logs begin at ... --
    'journal_marker': re.compile(r'^--\s.*\s--$'),
}


def classify_log_level(line: str) -> str:
    """Return 'error', 'warning' or 'info' for a raw log line"""
    lowered = line.lower()
    for level, keywords in LEVEL_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return level
    return DEFAULT_LEVEL


def extract_timestamp(line: str, now: Optional[datetime] = None) -> str:
    match = PATTERNS['timestamp'].match(line)
    if match:
        return match.group(1)
    return (now or datetime.now()).strftime(SYSLOG_TIMESTAMP_FORMAT)


def extract_message(line: str) -> str:
    stripped = line.strip()
    match = PATTERNS['preamble'].match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_log_line(line: str, now: Optional[datetime] = None) -> Optional[Dict[str, str]]:
    """Parse one journal line, None for blank lines and journal markers"""
    stripped = line.strip()
    if not stripped or PATTERNS['journal_marker'].match(stripped):
        return None

    return {
        "timestamp": extract_timestamp(stripped, now),
        "level": classify_log_level(stripped),
        "message": extract_message(stripped),
    }


def parse_log_output(output: str, now: Optional[datetime] = None) -> List[Dict[str, str]]:
    entries = []
    for line in output.splitlines():
        entry = parse_log_line(line, now)
        if entry is not None:
            entries.append(entry)
    return entries
