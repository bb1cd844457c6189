"""Pydantic schemas for cm_catalog: the "list item" draft and listing cards.

ListingDraft mirrors the sell-item form: every field arrives as text. Pydantic
errors are converted into a single field-level ValidationError by
`validate_draft`, before anything is sent to the row API.
"""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.cm_catalog.domain.contact import contact_url
from src.cm_catalog.domain.models import Listing, NewListing
from src.cm_common.datetime_utils import time_ago
from src.cm_common.enums import Category, Condition
from src.cm_common.errors import ValidationError
from src.cm_common.money import paise_to_display, parse_price

# Leading optional "+", first digit 1-9, 2-15 digits in total
WHATSAPP_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
# Shortest country code + subscriber number WhatsApp will route
MIN_CONTACT_DIGITS = 8


def normalize_contact(value: str) -> str:
    return re.sub(r"\s", "", value)


# ---------------------------------------------------------------------------
# Draft (sell-item form)
# ---------------------------------------------------------------------------


class ListingDraft(BaseModel):
    title: str
    description: str
    price: str
    category: Category
    condition: Condition
    seller_name: str
    seller_contact: str
    image_ref: str | None = None

    @field_validator("title", "description", "seller_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def valid_price(cls, v: Any) -> str:
        text = str(v).strip() if v is not None else ""
        if not text:
            raise ValueError("This field is required")
        try:
            parse_price(text)
        except ValueError:
            raise ValueError("Please enter a valid non-negative price") from None
        return text

    @field_validator("category", "condition", mode="before")
    @classmethod
    def choice_required(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Please select an option")
        return v

    @field_validator("seller_contact")
    @classmethod
    def whatsapp_number(cls, v: str) -> str:
        v = normalize_contact(v)
        if not WHATSAPP_RE.match(v):
            raise ValueError("Please enter a valid WhatsApp number")
        if len(v.lstrip("+")) < MIN_CONTACT_DIGITS:
            raise ValueError("Include country code (e.g., +91 for India)")
        return v

    def to_new_listing(
        self, seller_email: str, campus: str, placeholder_image: str
    ) -> NewListing:
        return NewListing(
            title=self.title,
            description=self.description,
            price=parse_price(self.price),
            category=self.category,
            condition=self.condition,
            seller_name=self.seller_name,
            seller_contact=self.seller_contact,
            seller_email=seller_email,
            campus=campus,
            image_ref=self.image_ref or placeholder_image,
        )


def validate_draft(data: ListingDraft | dict[str, Any]) -> ListingDraft:
    """Validate raw form data; the first failing field becomes a ValidationError."""
    if isinstance(data, ListingDraft):
        data = data.model_dump()
    try:
        return ListingDraft.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "draft"
        if first["type"] == "value_error":
            message = str(first["ctx"]["error"])
        elif first["type"] == "enum":
            message = f"Unknown {field}: {first['input']}"
        else:
            message = first["msg"]
        raise ValidationError(field, message) from None


# ---------------------------------------------------------------------------
# Sold toggle
# ---------------------------------------------------------------------------


class SoldUpdateRequest(BaseModel):
    sold: bool


# ---------------------------------------------------------------------------
# Listing card (view model)
# ---------------------------------------------------------------------------


class ListingCard(BaseModel):
    id: str
    title: str
    description: str
    price_paise: int
    price_display: str
    category: str
    condition: str
    seller_name: str
    image_ref: str
    campus: str
    sold: bool
    is_own: bool
    created_at: str
    age: str
    contact_url: str

    @classmethod
    def from_domain(
        cls,
        listing: Listing,
        viewer_email: str | None,
        currency: str = "₹",
        now: datetime | None = None,
    ) -> "ListingCard":
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            price_paise=listing.price,
            price_display=paise_to_display(listing.price, currency),
            category=listing.category.value,
            condition=listing.condition.value,
            seller_name=listing.seller_name,
            image_ref=listing.image_ref,
            campus=listing.campus,
            sold=listing.sold,
            is_own=listing.is_owned_by(viewer_email),
            created_at=listing.created_at.isoformat(),
            age=time_ago(listing.created_at, now),
            contact_url=contact_url(listing, currency),
        )


class FilterOptions(BaseModel):
    categories: list[str]
    price_ranges: list[str]


class CatalogResponse(BaseModel):
    campus: str
    items: list[ListingCard]
    total_loaded: int
    filters: FilterOptions
