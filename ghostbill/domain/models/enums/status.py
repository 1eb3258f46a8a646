from enum import Enum

class RecurrenceStatus(str, Enum):
    active = "active"
    paused = "paused"
    canceled = "canceled"
