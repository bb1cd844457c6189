"""ListingStore — in-memory listings of the active campus.

The store is the single owner of the loaded listing set; the View Layer only
reads `listings` and goes through load/add/set_sold for changes.

Out-of-order guard: each load is tagged with a generation number and the
campus it targeted. A response that lands after a newer load, a clear, or
close() is discarded instead of overwriting the set. A load that does land is
reconciled with local writes committed after it was issued (new listings,
sold toggles), since its snapshot may have been read before them.

The store performs no authorization of its own; the row API decides whether
the caller may flip `sold`.
"""

import logging
from typing import Any

from src.cm_campus.domain.resolver import resolve_campus
from src.cm_catalog.application.schemas import ListingDraft, validate_draft
from src.cm_catalog.domain.models import Listing
from src.cm_catalog.domain.repository import ListingRepositoryProtocol
from src.cm_common.errors import (
    ListingCreateError,
    ListingLoadError,
    ListingNotFoundError,
    ListingUpdateError,
    NotAuthenticatedError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


class ListingStore:
    def __init__(
        self,
        repo: ListingRepositoryProtocol,
        placeholder_image: str = "/placeholder.svg",
    ) -> None:
        self._repo = repo
        self._placeholder_image = placeholder_image
        self._listings: list[Listing] = []
        self._campus: str | None = None
        self._generation = 0
        self._closed = False
        # listing_id -> sold value of an update still in flight
        self._pending_sold: dict[str, bool] = {}
        # Committed local writes, tagged with the generation they landed in.
        # A load issued before a write may not see it, so these are replayed
        # onto every load whose generation is not newer than the tag.
        self._committed_sold: dict[str, tuple[int, bool]] = {}
        self._committed_new: list[tuple[int, Listing]] = []

    @property
    def campus(self) -> str | None:
        return self._campus

    @property
    def listings(self) -> list[Listing]:
        return list(self._listings)

    def get(self, listing_id: str) -> Listing:
        for listing in self._listings:
            if listing.id == listing_id:
                return listing
        raise ListingNotFoundError(listing_id)

    # -----------------------------------------------------------------------
    # Load / clear
    # -----------------------------------------------------------------------

    async def load(self, campus: str) -> list[Listing]:
        """Replace the set with `campus` listings, newest first.

        On failure the previous set is kept and ListingLoadError is raised.
        """
        self._generation += 1
        generation = self._generation
        self._campus = campus

        try:
            fetched = await self._repo.list_by_campus(campus)
        except PersistenceError as exc:
            logger.warning("Listing load failed: campus=%s err=%s", campus, exc.message)
            if self._is_current(generation, campus):
                raise ListingLoadError(campus) from exc
            return self.listings

        if not self._is_current(generation, campus):
            logger.debug(
                "Discarding stale listing load: campus=%s generation=%d current=%d",
                campus, generation, self._generation,
            )
            return self.listings

        self._listings = self._reconcile(fetched, generation)
        self._prune_committed(generation)
        logger.info("Loaded %d listings for campus=%s", len(self._listings), campus)
        return self.listings

    def clear(self) -> None:
        """Drop the set and invalidate any in-flight load."""
        self._generation += 1
        self._campus = None
        self._listings = []
        self._pending_sold.clear()
        self._committed_sold.clear()
        self._committed_new.clear()

    def close(self) -> None:
        """Teardown: like clear(), and late responses never touch the store again."""
        self.clear()
        self._closed = True

    def _is_current(self, generation: int, campus: str) -> bool:
        return not self._closed and generation == self._generation and campus == self._campus

    def _reconcile(self, fetched: list[Listing], generation: int) -> list[Listing]:
        """Overlay local writes the fetched snapshot may predate.

        Listings created since the load was issued go on top when missing;
        sold values committed since then, or still in flight, win over the
        fetched ones.
        """
        sold = {
            listing_id: value
            for listing_id, (tag, value) in self._committed_sold.items()
            if tag >= generation
        }
        sold.update(self._pending_sold)

        fetched_ids = {lst.id for lst in fetched}
        created = [
            lst for tag, lst in reversed(self._committed_new)
            if tag >= generation and lst.id not in fetched_ids
        ]
        return [
            lst.with_sold(sold[lst.id]) if lst.id in sold else lst
            for lst in created + fetched
            if lst.campus == self._campus
        ]

    def _prune_committed(self, generation: int) -> None:
        # writes tagged before this load was issued are in its snapshot
        self._committed_sold = {
            listing_id: entry
            for listing_id, entry in self._committed_sold.items()
            if entry[0] >= generation
        }
        self._committed_new = [entry for entry in self._committed_new if entry[0] >= generation]

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    async def add(self, draft: ListingDraft | dict[str, Any], seller_email: str) -> Listing:
        """Validate and submit a new listing.

        ValidationError is raised before any row-API call; ListingCreateError
        when the insert fails. Neither changes the in-memory set.
        """
        valid = validate_draft(draft)
        campus = resolve_campus(seller_email)
        if campus is None:
            raise NotAuthenticatedError()

        new_listing = valid.to_new_listing(seller_email, campus, self._placeholder_image)
        try:
            created = await self._repo.insert(new_listing)
        except PersistenceError as exc:
            logger.warning("Listing insert failed: campus=%s err=%s", campus, exc.message)
            raise ListingCreateError() from exc

        if not self._closed and created.campus == self._campus:
            self._committed_new.append((self._generation, created))
            self._listings.insert(0, created)
        logger.info("Listed item id=%s campus=%s", created.id, campus)
        return created

    async def set_sold(self, listing_id: str, sold: bool) -> Listing | None:
        """Flip `sold` through the row API, then update only that field locally.

        Returns the updated in-memory listing, or None when the listing is not
        in the loaded set (e.g. a campus switch happened meanwhile).
        """
        self._pending_sold[listing_id] = sold
        try:
            await self._repo.update_sold(listing_id, sold)
        except PersistenceError as exc:
            logger.warning("Sold update failed: id=%s err=%s", listing_id, exc.message)
            raise ListingUpdateError(listing_id) from exc
        finally:
            self._pending_sold.pop(listing_id, None)
        if not self._closed:
            self._committed_sold[listing_id] = (self._generation, sold)

        for i, listing in enumerate(self._listings):
            if listing.id == listing_id:
                self._listings[i] = listing.with_sold(sold)
                return self._listings[i]
        return None
