from enum import StrEnum


class RosterSortField(StrEnum):
    NAME = 'name'
    EMAIL = 'email'
    RESERVED_AT = 'reserved_at'
    CHECK_IN = 'check_in'


class SortDirection(StrEnum):
    ASC = 'asc'
    DESC = 'desc'

    def flipped(self) -> 'SortDirection':
        return SortDirection.DESC if self == SortDirection.ASC else SortDirection.ASC
