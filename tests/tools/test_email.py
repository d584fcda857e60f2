"""Tests for email tools."""

import hashlib

import pytest

from mailchimp_lists.tools.email import get_subscriber_hash, normalize_email


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("user@example.com", "user@example.com"),
        ("User@Example.COM", "user@example.com"),
        ("  name+tag@gmail.com\n", "name+tag@gmail.com"),
    ],
)
def test_normalize_email(email, expected):
    """Test normalizing email addresses."""
    assert normalize_email(email) == expected


def test_get_subscriber_hash():
    """The subscriber hash is the MD5 digest of the lowercase email."""
    assert get_subscriber_hash("test@example.com") == hashlib.md5(b"test@example.com").hexdigest()  # noqa: S324


@pytest.mark.parametrize(
    "email",
    ["user@example.com", "Mixed.Case+Tag@Sub.Example.org", "ÉLODIE@exemple.fr"],
)
def test_get_subscriber_hash_case_insensitive(email):
    """The hash does not depend on the case of the email."""
    assert get_subscriber_hash(email) == get_subscriber_hash(email.upper())
    assert get_subscriber_hash(email) == get_subscriber_hash(email.lower())
