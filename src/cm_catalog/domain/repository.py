# src/cm_catalog/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation (hosted row API).
Authorization (who may flip `sold`) is enforced by the row API itself.
"""

from typing import Protocol

from src.cm_catalog.domain.models import Listing, NewListing


class ListingRepositoryProtocol(Protocol):
    async def list_by_campus(self, campus: str) -> list[Listing]:
        """All listings of `campus`, newest first."""
        ...

    async def insert(self, listing: NewListing) -> Listing: ...

    async def update_sold(self, listing_id: str, sold: bool) -> None: ...
