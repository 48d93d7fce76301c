import csv
from datetime import datetime
import io
import re
from typing import Iterable, Optional

from src.service.rsvp.domain.reconciliation_domain import RosterEntry


ROSTER_CSV_HEADER = ['Name', 'Email', 'Reserved At', 'Checked In At', 'Status']


def _format_time(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ''


def render_roster_csv(roster: Iterable[RosterEntry]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(ROSTER_CSV_HEADER)
    for entry in roster:
        writer.writerow(
            [
                entry.name,
                entry.email,
                _format_time(entry.reserved_at),
                _format_time(entry.checked_in_at),
                entry.status,
            ]
        )
    return buffer.getvalue()


def roster_csv_filename(title: str) -> str:
    return f'{re.sub(r"[^a-zA-Z0-9]", "_", title)}_attendees.csv'
