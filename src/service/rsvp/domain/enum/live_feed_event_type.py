from enum import StrEnum


class LiveFeedEventType(StrEnum):
    INITIAL_STATE = 'initial_state'
    CHECK_IN = 'check_in'
