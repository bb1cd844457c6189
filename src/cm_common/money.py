"""Integer arithmetic utilities for rupee prices.

All prices are int paise (1 rupee = 100 paise). No float anywhere in the
catalog; the hosted table stores a decimal rupee string built from paise so
the value round-trips exactly.
"""

import re

PAISE_PER_RUPEE = 100

_AMOUNT_RE = re.compile(r"^(\d+)(?:\.(\d{1,2}))?$")


def rupees(amount: int) -> int:
    """Whole rupees -> paise: rupees(500) == 50000."""
    return amount * PAISE_PER_RUPEE


def parse_price(text: str) -> int:
    """Parse user/API text like '800', '799.5', '799.50' into paise.

    Raises ValueError for anything that is not a non-negative decimal amount
    with at most two fraction digits.
    """
    match = _AMOUNT_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Not a valid non-negative price: {text!r}")
    whole, frac = match.groups()
    return int(whole) * PAISE_PER_RUPEE + int((frac or "").ljust(2, "0"))


def paise_to_amount(paise: int) -> str:
    """Plain decimal string without grouping: 80000 -> '800', 79950 -> '799.50'."""
    if paise < 0:
        raise ValueError(f"Price must be non-negative, got {paise}")
    whole, frac = divmod(paise, PAISE_PER_RUPEE)
    return str(whole) if frac == 0 else f"{whole}.{frac:02d}"


def paise_to_display(paise: int, currency: str = "₹") -> str:
    """Grouped display string: 3500000 -> '₹35,000', 79950 -> '₹799.50'."""
    whole, frac = divmod(paise, PAISE_PER_RUPEE)
    if frac == 0:
        return f"{currency}{whole:,}"
    return f"{currency}{whole:,}.{frac:02d}"
