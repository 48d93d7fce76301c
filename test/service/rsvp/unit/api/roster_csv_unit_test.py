from datetime import datetime, timezone

import pytest

from src.service.rsvp.domain.reconciliation_domain import RosterEntry
from src.service.rsvp.driving_adapter.http_controller.roster_csv import (
    render_roster_csv,
    roster_csv_filename,
)


@pytest.mark.unit
class TestRosterCsv:
    def test_rows_follow_roster_order(self):
        roster = [
            RosterEntry(
                student_id=1,
                name='Lee, Ann',
                email='ann@test.com',
                has_reservation=True,
                has_check_in=False,
                reserved_at=datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc),
                checked_in_at=None,
                position=0,
            )
        ]

        lines = render_roster_csv(roster).splitlines()

        assert lines == [
            'Name,Email,Reserved At,Checked In At,Status',
            '"Lee, Ann",ann@test.com,2026-05-01T09:30:00+00:00,,Reserved',
        ]

    @pytest.mark.parametrize(
        'title,expected',
        [
            ('Robot Build Night', 'Robot_Build_Night_attendees.csv'),
            ('Q&A: 2026/05', 'Q_A__2026_05_attendees.csv'),
        ],
    )
    def test_filename_replaces_non_alphanumerics(self, title, expected):
        assert roster_csv_filename(title) == expected
