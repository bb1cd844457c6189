"""Catalog filter — campus scoping plus search/category/price-range predicates.

All predicates are conjunctive; the campus predicate is the privacy boundary
and is applied regardless of the other settings. The filter is pure and keeps
the input order (newest-first from the row API).

Both mid buckets are closed, so 2000 rupees matches "₹500-₹2000" and
"₹2000-₹10000". 500 matches only the former, 10000 only the latter.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.cm_catalog.domain.models import Listing
from src.cm_common.enums import ALL, Category, PriceRange
from src.cm_common.errors import ValidationError
from src.cm_common.money import rupees

CATEGORY_FILTERS: tuple[str, ...] = (ALL, *(c.value for c in Category))
PRICE_RANGE_FILTERS: tuple[str, ...] = (ALL, *(p.value for p in PriceRange))


def in_price_range(price: int, price_range: PriceRange) -> bool:
    """`price` is in paise."""
    if price_range is PriceRange.UNDER_500:
        return price < rupees(500)
    if price_range is PriceRange.FROM_500_TO_2000:
        return rupees(500) <= price <= rupees(2000)
    if price_range is PriceRange.FROM_2000_TO_10000:
        return rupees(2000) <= price <= rupees(10000)
    return price > rupees(10000)


@dataclass(frozen=True)
class FilterConfig:
    search_text: str = ""
    category: str = ALL
    price_range: str = ALL

    def __post_init__(self) -> None:
        if self.category not in CATEGORY_FILTERS:
            raise ValidationError("category", f"Unknown category: {self.category}")
        if self.price_range not in PRICE_RANGE_FILTERS:
            raise ValidationError("price_range", f"Unknown price range: {self.price_range}")

    @property
    def is_inert(self) -> bool:
        return not self.search_text and self.category == ALL and self.price_range == ALL


def _matches(listing: Listing, campus: str, config: FilterConfig, needle: str) -> bool:
    if listing.campus != campus:
        return False
    if needle and needle not in listing.title.lower() and needle not in listing.description.lower():
        return False
    if config.category != ALL and listing.category.value != config.category:
        return False
    if config.price_range != ALL and not in_price_range(listing.price, PriceRange(config.price_range)):
        return False
    return True


def filter_listings(
    listings: Iterable[Listing], campus: str, config: FilterConfig
) -> list[Listing]:
    needle = config.search_text.lower()
    return [lst for lst in listings if _matches(lst, campus, config, needle)]
