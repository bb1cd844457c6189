"""Tests for cm_catalog.domain — the Listing model and the WhatsApp contact link."""

from urllib.parse import parse_qs, urlparse

import pytest

from src.cm_catalog.domain.contact import contact_message, contact_url
from tests.fakes import make_listing


class TestListing:
    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_listing(price=-1)

    def test_with_sold_changes_only_sold(self) -> None:
        listing = make_listing()
        sold = listing.with_sold(True)
        assert sold.sold is True
        assert listing.sold is False
        assert sold == make_listing(sold=True)

    def test_owner_match_ignores_case(self) -> None:
        assert make_listing(seller_email="Rahul@IITD.ac.in").is_owned_by("rahul@iitd.ac.in")

    def test_owner_none(self) -> None:
        assert not make_listing().is_owned_by(None)


class TestContact:
    def test_message(self) -> None:
        listing = make_listing(seller_name="Priya", title="Lab Coat", price=45000)
        assert contact_message(listing) == (
            "Hi Priya, I'm interested in your Lab Coat listed on Campus Mart for ₹450. "
            "Is it still available?"
        )

    def test_message_keeps_paise(self) -> None:
        assert "₹799.50." in contact_message(make_listing(price=79950))

    def test_url_uses_digits_only(self) -> None:
        url = contact_url(make_listing(seller_contact="+91 98765-43210"))
        assert urlparse(url).path == "/919876543210"

    def test_url_text_round_trips(self) -> None:
        listing = make_listing()
        query = parse_qs(urlparse(contact_url(listing)).query)
        assert query["text"] == [contact_message(listing)]

    def test_url_encodes_spaces_as_percent20(self) -> None:
        url = contact_url(make_listing())
        assert "%20" in url
        assert "+" not in url.split("?", 1)[1]
