"""Email/domain helpers used to place accounts in tenants."""

import re

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
_DOMAIN_PATTERN = re.compile(r"^[^\s@]+@([^\s@]+\.[^\s@]+)$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def extract_domain(email: str) -> str | None:
    """Return the lower-cased domain of an email address, or None if malformed."""
    match = _DOMAIN_PATTERN.match(email.strip())
    if not match:
        return None
    return match.group(1).lower()


def company_name_for_domain(domain: str) -> str:
    """Display name for an auto-created tenant.

    ``acme-labs.io`` -> ``Acme Labs Company``.
    """
    label = domain.split(".")[0]
    words = [w[:1].upper() + w[1:] for w in label.split("-") if w]
    return " ".join(words) + " Company"


def slugify(name: str) -> str:
    """Section id from a display name: ``"Code Review"`` -> ``"code-review"``."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "section"
