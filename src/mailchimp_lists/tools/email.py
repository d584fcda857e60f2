"""Email related tools."""

import hashlib


def normalize_email(email: str) -> str:
    """Return the email the way Mailchimp compares it."""
    return email.strip().lower()


def get_subscriber_hash(email: str) -> str:
    """
    Compute the Mailchimp subscriber hash of an email address.

    Mailchimp identifies list members by the MD5 hex digest of the lowercase
    email address, so the hash does not depend on the case of the input.
    """
    return hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()  # noqa: S324
