"""CatalogApplicationService — thin composition layer for the View Layer.

Reads go through the in-memory ListingStore plus the pure catalog filter;
writes are delegated to the store. The seller-only check for the sold
toggle lives here (View Layer authorization); the row API enforces it again.
"""

from datetime import datetime
from typing import Any

from src.cm_catalog.application.schemas import (
    CatalogResponse,
    FilterOptions,
    ListingCard,
    ListingDraft,
)
from src.cm_catalog.application.store import ListingStore
from src.cm_catalog.domain.contact import contact_url
from src.cm_catalog.domain.filters import (
    CATEGORY_FILTERS,
    PRICE_RANGE_FILTERS,
    FilterConfig,
    filter_listings,
)
from src.cm_common.errors import NotListingOwnerError


class CatalogApplicationService:
    def __init__(self, store: ListingStore, currency: str = "₹") -> None:
        self._store = store
        self._currency = currency

    def browse(
        self,
        campus: str,
        viewer_email: str,
        config: FilterConfig,
        now: datetime | None = None,
    ) -> CatalogResponse:
        loaded = self._store.listings
        visible = filter_listings(loaded, campus, config)
        return CatalogResponse(
            campus=campus,
            items=[ListingCard.from_domain(lst, viewer_email, self._currency, now) for lst in visible],
            total_loaded=len(loaded),
            filters=FilterOptions(
                categories=list(CATEGORY_FILTERS),
                price_ranges=list(PRICE_RANGE_FILTERS),
            ),
        )

    async def list_item(
        self, seller_email: str, draft: ListingDraft | dict[str, Any]
    ) -> ListingCard:
        created = await self._store.add(draft, seller_email)
        return ListingCard.from_domain(created, seller_email, self._currency)

    async def set_sold(self, viewer_email: str, listing_id: str, sold: bool) -> ListingCard:
        listing = self._store.get(listing_id)
        if not listing.is_owned_by(viewer_email):
            raise NotListingOwnerError(listing_id)
        updated = await self._store.set_sold(listing_id, sold) or listing.with_sold(sold)
        return ListingCard.from_domain(updated, viewer_email, self._currency)

    def contact_url(self, listing_id: str) -> str:
        return contact_url(self._store.get(listing_id), self._currency)
