"""Email address checks shared by the sanitizer, validator and mail path."""

import email_validator
from email_validator import EmailNotValidError, validate_email

# Internal relays often live on .local or .test domains; only syntax matters here
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def is_email(value: str | None) -> bool:
    """Check whether a value is a syntactically valid email address.

    No DNS lookups are made; only the address syntax is checked.
    """
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def sanitize_email(value: object) -> str:
    """Normalize a submitted address, returning "" when it is malformed."""
    if value is None:
        return ""
    candidate = str(value).strip()
    if not candidate:
        return ""
    try:
        return validate_email(candidate, check_deliverability=False).normalized
    except EmailNotValidError:
        return ""
