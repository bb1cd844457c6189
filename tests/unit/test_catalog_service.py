"""Unit tests for CatalogApplicationService — browse, list, sold toggle, contact."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from src.cm_catalog.application.service import CatalogApplicationService
from src.cm_catalog.application.store import ListingStore
from src.cm_catalog.domain.filters import FilterConfig
from src.cm_common.errors import ListingNotFoundError, NotListingOwnerError
from tests.fakes import make_listing

CAMPUS = "iitd-ac-in"
NOW = datetime(2026, 1, 3, tzinfo=UTC)


@pytest.fixture
def repo() -> AsyncMock:
    mock = AsyncMock()
    mock.list_by_campus = AsyncMock(return_value=[
        make_listing(id="a", title="Calculator", seller_email="alice@iitd.ac.in"),
        make_listing(id="b", title="Textbook", seller_email="bob@iitd.ac.in"),
    ])
    mock.update_sold = AsyncMock(return_value=None)
    return mock


@pytest_asyncio.fixture
async def service(repo: AsyncMock) -> CatalogApplicationService:
    store = ListingStore(repo)
    await store.load(CAMPUS)
    return CatalogApplicationService(store)


class TestBrowse:
    async def test_cards_for_campus(self, service: CatalogApplicationService) -> None:
        result = service.browse(CAMPUS, "alice@iitd.ac.in", FilterConfig(), now=NOW)
        assert result.campus == CAMPUS
        assert [c.id for c in result.items] == ["a", "b"]
        assert [c.is_own for c in result.items] == [True, False]
        assert result.total_loaded == 2
        assert result.filters.categories[0] == "All"

    async def test_filter_applied(self, service: CatalogApplicationService) -> None:
        result = service.browse(CAMPUS, "alice@iitd.ac.in", FilterConfig(search_text="calc"))
        assert [c.id for c in result.items] == ["a"]
        assert result.total_loaded == 2

    async def test_other_campus_sees_nothing(self, service: CatalogApplicationService) -> None:
        result = service.browse("iitb-ac-in", "carol@iitb.ac.in", FilterConfig())
        assert result.items == []


class TestSetSold:
    async def test_owner_can_toggle(self, service: CatalogApplicationService, repo: AsyncMock) -> None:
        card = await service.set_sold("alice@iitd.ac.in", "a", True)
        assert card.sold is True
        repo.update_sold.assert_awaited_once_with("a", True)

    async def test_non_owner_rejected_before_call(
        self, service: CatalogApplicationService, repo: AsyncMock
    ) -> None:
        with pytest.raises(NotListingOwnerError):
            await service.set_sold("alice@iitd.ac.in", "b", True)
        repo.update_sold.assert_not_awaited()

    async def test_unknown_listing(self, service: CatalogApplicationService) -> None:
        with pytest.raises(ListingNotFoundError):
            await service.set_sold("alice@iitd.ac.in", "zzz", True)


class TestContact:
    async def test_contact_url(self, service: CatalogApplicationService) -> None:
        assert service.contact_url("b").startswith("https://wa.me/919876543210?text=Hi%20Rahul%20Kumar")


class TestListItem:
    async def test_returns_own_card(self, service: CatalogApplicationService, repo: AsyncMock) -> None:
        repo.insert = AsyncMock(return_value=make_listing(id="new", seller_email="alice@iitd.ac.in"))
        card = await service.list_item("alice@iitd.ac.in", {
            "title": "Engineering Mathematics Textbook",
            "description": "Well-maintained",
            "price": "800",
            "category": "Textbooks",
            "condition": "Good",
            "seller_name": "Alice",
            "seller_contact": "+919876543210",
        })
        assert card.id == "new"
        assert card.is_own is True
        assert card.price_display == "₹800"
