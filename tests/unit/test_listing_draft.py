"""Tests for cm_catalog.application.schemas — the sell-item draft and listing cards."""

from datetime import UTC, datetime, timedelta

import pytest

from src.cm_catalog.application.schemas import ListingCard, ListingDraft, validate_draft
from src.cm_common.enums import Category, Condition
from src.cm_common.errors import ValidationError
from tests.fakes import make_listing


def _draft(**kwargs) -> dict:
    defaults = {
        "title": "Scientific Calculator",
        "description": "Casio fx-991EX, barely used",
        "price": "1200",
        "category": "Electronics",
        "condition": "Excellent",
        "seller_name": "Priya Sharma",
        "seller_contact": "+919876543210",
    }
    defaults.update(kwargs)
    return defaults


def _field_error(**kwargs) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        validate_draft(_draft(**kwargs))
    return exc_info.value


class TestValidDraft:
    def test_accepts_complete_form(self) -> None:
        draft = validate_draft(_draft())
        assert draft.category is Category.ELECTRONICS
        assert draft.condition is Condition.EXCELLENT

    def test_strips_text_fields(self) -> None:
        draft = validate_draft(_draft(title="  Calculator  "))
        assert draft.title == "Calculator"

    def test_contact_whitespace_removed(self) -> None:
        assert validate_draft(_draft(seller_contact="+91 98765 43210")).seller_contact == "+919876543210"

    def test_contact_without_plus(self) -> None:
        assert validate_draft(_draft(seller_contact="919876543210")).seller_contact == "919876543210"

    def test_numeric_price_accepted(self) -> None:
        assert validate_draft(_draft(price=800)).price == "800"

    def test_zero_price_accepted(self) -> None:
        assert validate_draft(_draft(price="0")).price == "0"

    def test_model_instance_revalidated(self) -> None:
        draft = ListingDraft(**_draft())
        assert validate_draft(draft) == draft


class TestInvalidDraft:
    def test_non_numeric_price(self) -> None:
        err = _field_error(price="abc")
        assert err.field == "price"
        assert err.message == "Please enter a valid non-negative price"

    def test_negative_price(self) -> None:
        assert _field_error(price="-10").field == "price"

    def test_blank_title(self) -> None:
        err = _field_error(title="   ")
        assert err.field == "title"
        assert err.message == "This field is required"

    def test_missing_description(self) -> None:
        data = _draft()
        del data["description"]
        with pytest.raises(ValidationError) as exc_info:
            validate_draft(data)
        assert exc_info.value.field == "description"

    def test_short_contact_needs_country_code(self) -> None:
        err = _field_error(seller_contact="12345")
        assert err.field == "seller_contact"
        assert "country code" in err.message

    def test_contact_with_letters(self) -> None:
        err = _field_error(seller_contact="+91abc")
        assert err.message == "Please enter a valid WhatsApp number"

    def test_contact_leading_zero(self) -> None:
        assert _field_error(seller_contact="09876543210").field == "seller_contact"

    def test_category_not_selected(self) -> None:
        err = _field_error(category="")
        assert err.field == "category"
        assert err.message == "Please select an option"

    def test_unknown_condition(self) -> None:
        err = _field_error(condition="Broken")
        assert err.field == "condition"
        assert err.message == "Unknown condition: Broken"

    def test_first_failing_field_reported(self) -> None:
        assert _field_error(title="", price="abc").field == "title"


class TestToNewListing:
    def test_stamps_seller_and_campus(self) -> None:
        new = validate_draft(_draft(price="799.50")).to_new_listing(
            "priya@iitd.ac.in", "iitd-ac-in", "/placeholder.svg"
        )
        assert new.price == 79950
        assert new.seller_email == "priya@iitd.ac.in"
        assert new.campus == "iitd-ac-in"
        assert new.image_ref == "/placeholder.svg"

    def test_keeps_given_image(self) -> None:
        new = validate_draft(_draft(image_ref="https://img.example/calc.jpg")).to_new_listing(
            "priya@iitd.ac.in", "iitd-ac-in", "/placeholder.svg"
        )
        assert new.image_ref == "https://img.example/calc.jpg"


class TestListingCard:
    def test_from_domain(self) -> None:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        listing = make_listing(price=3500000, created_at=created)
        card = ListingCard.from_domain(listing, "RAHUL@iitd.ac.in", now=created + timedelta(days=3))
        assert card.price_display == "₹35,000"
        assert card.price_paise == 3500000
        assert card.category == "Textbooks"
        assert card.is_own is True
        assert card.age == "3 days ago"
        assert card.contact_url.startswith("https://wa.me/919876543210?text=")

    def test_other_viewer_is_not_owner(self) -> None:
        card = ListingCard.from_domain(make_listing(), "alice@iitd.ac.in")
        assert card.is_own is False

    def test_anonymous_viewer(self) -> None:
        assert ListingCard.from_domain(make_listing(), None).is_own is False
