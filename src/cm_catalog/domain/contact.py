"""WhatsApp deep link for contacting a seller."""

import re
from urllib.parse import quote

from src.cm_catalog.domain.models import Listing
from src.cm_common.money import paise_to_amount

WHATSAPP_BASE_URL = "https://wa.me"

_MESSAGE_TEMPLATE = (
    "Hi {seller_name}, I'm interested in your {title} listed on Campus Mart "
    "for {currency}{price}. Is it still available?"
)

# Same unescaped set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def contact_message(listing: Listing, currency: str = "₹") -> str:
    return _MESSAGE_TEMPLATE.format(
        seller_name=listing.seller_name,
        title=listing.title,
        currency=currency,
        price=paise_to_amount(listing.price),
    )


def contact_url(listing: Listing, currency: str = "₹") -> str:
    digits = re.sub(r"\D", "", listing.seller_contact)
    text = quote(contact_message(listing, currency), safe=_URI_COMPONENT_SAFE)
    return f"{WHATSAPP_BASE_URL}/{digits}?text={text}"
