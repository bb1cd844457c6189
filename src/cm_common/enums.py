"""Global enums — values are stored verbatim in the hosted `products` table."""

from enum import Enum

# Sentinel accepted by the catalog filter for "no restriction"
ALL = "All"


class Category(str, Enum):
    TEXTBOOKS = "Textbooks"
    NOTES = "Notes"
    ELECTRONICS = "Electronics"
    STATIONERY = "Stationery"
    MISCELLANEOUS = "Miscellaneous"


class Condition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"


class PriceRange(str, Enum):
    """Price filter buckets, labelled exactly as the catalog UI shows them."""
    UNDER_500 = "Under ₹500"
    FROM_500_TO_2000 = "₹500-₹2000"
    FROM_2000_TO_10000 = "₹2000-₹10000"
    ABOVE_10000 = "Above ₹10000"
