"""Domain models for cm_catalog — pure dataclasses, no I/O."""

from dataclasses import dataclass, replace
from datetime import datetime

from src.cm_common.enums import Category, Condition


@dataclass(frozen=True)
class Listing:
    id: str
    title: str
    description: str
    price: int  # paise
    category: Category
    condition: Condition
    seller_name: str
    seller_contact: str  # WhatsApp number
    seller_email: str
    campus: str  # campus key, fixed at creation
    image_ref: str
    created_at: datetime
    sold: bool = False

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Listing price must be non-negative, got {self.price}")

    def with_sold(self, sold: bool) -> "Listing":
        """Copy with only `sold` changed; every other field is fixed after creation."""
        return replace(self, sold=sold)

    def is_owned_by(self, email: str | None) -> bool:
        return email is not None and self.seller_email.lower() == email.lower()


@dataclass(frozen=True)
class NewListing:
    """Validated, campus-stamped payload for the row API (id/created_at assigned there)."""

    title: str
    description: str
    price: int  # paise
    category: Category
    condition: Condition
    seller_name: str
    seller_contact: str
    seller_email: str
    campus: str
    image_ref: str
