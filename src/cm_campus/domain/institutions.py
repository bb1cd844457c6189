"""Known institution domains and the sign-up domain gate."""

from types import MappingProxyType

KNOWN_INSTITUTIONS = MappingProxyType({
    "iitd.ac.in": "Indian Institute of Technology Delhi",
    "student.iitd.ac.in": "Indian Institute of Technology Delhi",
    "iitb.ac.in": "Indian Institute of Technology Bombay",
    "iitk.ac.in": "Indian Institute of Technology Kanpur",
    "iitm.ac.in": "Indian Institute of Technology Madras",
    "iitr.ac.in": "Indian Institute of Technology Roorkee",
    "dtu.ac.in": "Delhi Technological University",
    "nsit.ac.in": "Netaji Subhas Institute of Technology",
    "bits-pilani.ac.in": "Birla Institute of Technology and Science, Pilani",
    "vit.ac.in": "Vellore Institute of Technology",
    "manipal.edu": "Manipal Academy of Higher Education",
    "srm.ap.edu": "SRM University, Andhra Pradesh",
})

ACADEMIC_SUFFIXES = (".edu", ".ac.in")


def is_allowed_signup_domain(domain: str | None) -> bool:
    """True for allow-listed institutions and generic academic suffixes."""
    if not domain:
        return False
    domain = domain.lower()
    return domain in KNOWN_INSTITUTIONS or domain.endswith(ACADEMIC_SUFFIXES)
