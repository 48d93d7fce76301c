from collections.abc import Iterable, Mapping

from uuid_utils import UUID

from src.service.rsvp.domain.entity.attendance_record_entity import (
    AttendanceRecord,
    RecentCheckIn,
)
from src.service.rsvp.domain.entity.user_entity import UNKNOWN_STUDENT_NAME, UserEntity


DEFAULT_RECENT_LIMIT = 10


class RecentActivity:
    """
    Observer-side view of one event's check-ins: a running attendance counter
    and the newest check-ins, newest first, capped at `limit`.

    The cap trims the display list only. A check-in already seen (snapshot
    overlapping the subscription) is not counted twice.
    """

    def __init__(self, *, limit: int = DEFAULT_RECENT_LIMIT) -> None:
        self.limit = limit
        self.attendance_count = 0
        self._entries: list[RecentCheckIn] = []
        self._seen: set[UUID] = set()

    def seed(self, *, recent: Iterable[RecentCheckIn], attendance_count: int) -> None:
        """Load the snapshot read from the ledger (`recent` newest first)"""
        self._entries = list(recent)[: self.limit]
        self._seen = {entry.record_id for entry in self._entries}
        self.attendance_count = attendance_count

    def record(self, entry: RecentCheckIn) -> bool:
        if entry.record_id in self._seen:
            return False
        self._seen.add(entry.record_id)
        self.attendance_count += 1
        self._entries.insert(0, entry)
        del self._entries[self.limit :]
        return True

    @property
    def entries(self) -> list[RecentCheckIn]:
        return list(self._entries)


def to_recent_check_ins(
    records: Iterable[AttendanceRecord], profiles: Mapping[int, UserEntity]
) -> list[RecentCheckIn]:
    entries = []
    for record in records:
        profile = profiles.get(record.student_id)
        entries.append(
            RecentCheckIn(
                record_id=record.id,
                student_id=record.student_id,
                name=profile.name if profile else UNKNOWN_STUDENT_NAME,
                checked_in_at=record.checked_in_at,
            )
        )
    return entries
