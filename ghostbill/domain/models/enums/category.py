from enum import Enum
from typing import Optional

class ExpenseCategory(str, Enum):
    groceries = "groceries"
    coffee = "coffee"
    dining = "dining"
    transport = "transport"
    fuel = "fuel"
    shopping = "shopping"
    utilities = "utilities"
    housing = "housing"
    entertainment = "entertainment"
    travel = "travel"
    other = "other"

    @classmethod
    def from_text(cls, value: Optional[str]) -> "ExpenseCategory":
        """Unknown or missing category text tallies as `other`."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.other
