"""
LifePlanLab Kind Constants (categories, item types, plan defaults).
"""


class K:
    # === Categories (where an item is booked) ===
    INCOME = "income"
    EXPENSE = "expense"
    ASSET = "asset"
    DEBT = "debt"

    # === Item types (fixed at creation) ===
    FLOW = "flow"  # recurring amount over a start/end window
    STOCK = "stock"  # balance with growth and yearly contribution

    # === Flow frequencies ===
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def all_categories(cls) -> list[str]:
        """Enumerate all categories in projection order."""
        return [cls.INCOME, cls.EXPENSE, cls.ASSET, cls.DEBT]

    @classmethod
    def all_item_types(cls) -> list[str]:
        return [cls.FLOW, cls.STOCK]

    @classmethod
    def all_frequencies(cls) -> list[str]:
        return [cls.MONTHLY, cls.YEARLY]


# Category -> key of the state collection holding its items
CATEGORY_KEYS = {
    K.INCOME: "incomes",
    K.EXPENSE: "expenses",
    K.ASSET: "assets",
    K.DEBT: "debts",
}

# Literal name of the plan every item always owns
DEFAULT_PLAN_NAME = "デフォルトプラン"
MAX_PLAN_NAME_LENGTH = 50

# Seed year for zeroed settings and default simulation start
DEFAULT_BASE_YEAR = 2024

# Yearly flows are booked in this month of the monthly breakdown
ANNUAL_BOOKING_MONTH = 3

# Amount form limits
MIN_YEAR = 1900
MAX_YEAR = 2100
MAX_SPAN_YEARS = 100
MAX_AMOUNT = 999_999_999
MIN_RATE = -100
MAX_RATE = 1000
EXTREME_RATE = 50
