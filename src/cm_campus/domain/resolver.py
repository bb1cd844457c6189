"""Campus resolution: email -> domain -> campus key.

The campus key is the storage/URL-safe partition token for listings:
the lower-cased email domain with every "." replaced by "-"
(alice@iitd.ac.in -> "iitd-ac-in"). Only raw emails are valid input.
"""

from src.cm_campus.domain.institutions import KNOWN_INSTITUTIONS, is_allowed_signup_domain


def extract_domain(email: str) -> str | None:
    """Lower-cased domain of `email`, or None unless there is exactly one '@'."""
    if email.count("@") != 1:
        return None
    local, domain = email.strip().split("@")
    domain = domain.strip().lower()
    if not local or not domain:
        return None
    return domain


def resolve_campus(email: str) -> str | None:
    """Campus key for `email`; None means the caller treats it as unauthenticated."""
    domain = extract_domain(email)
    if domain is None:
        return None
    return domain.replace(".", "-")


def is_campus_email(email: str) -> bool:
    """True when `email` resolves and its domain passes the sign-up gate."""
    return is_allowed_signup_domain(extract_domain(email))


def format_campus_display(domain: str) -> str:
    """Header badge text: first DNS label, upper-cased, hyphens as spaces."""
    return domain.split(".")[0].upper().replace("-", " ")


def campus_full_name(domain: str) -> str:
    return KNOWN_INSTITUTIONS.get(domain.lower(), format_campus_display(domain))
