from enum import Enum
from typing import Any

class Frequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"      # same day every month, clamped to month end
    yearly = "yearly"        # same month & day every year, clamped to month end

    @classmethod
    def parse(cls, token: Any) -> "Frequency":
        """
        Case-insensitive lookup of a stored frequency token.

        Anything that is not one of the five known tokens resolves to monthly,
        including None, the empty string and values that are not strings. This
        is a lenient default, not a validation step: bad input is masked rather
        than rejected.
        """
        if not isinstance(token, str):
            return cls.monthly
        normalized = token.strip().lower()
        match normalized:
            case "daily":
                return cls.daily
            case "weekly":
                return cls.weekly
            case "biweekly":
                return cls.biweekly
            case "yearly":
                return cls.yearly
            case _:
                return cls.monthly
