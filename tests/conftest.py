"""Fixtures for the test suite."""

import pytest

from mailchimp_lists.client import Mailchimp


@pytest.fixture(name="mailchimp_client")
def fixture_mailchimp_client():
    """Generate a Mailchimp client bound to the us1 datacenter."""
    return Mailchimp(api_key="test-api-key-us1")
