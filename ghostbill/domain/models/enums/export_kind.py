from enum import Enum

class ExportKind(str, Enum):
    expenses = "expenses"
    income = "income"
    both = "both"
