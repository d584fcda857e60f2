"""Tests for ApiKeyValue."""

import os

import pytest

from mailchimp_lists.configuration.values import ApiKeyValue

FILE_API_KEY_PATH = os.path.join(os.path.dirname(os.path.realpath(__file__)), "test_api_key")


@pytest.fixture(autouse=True)
def _mock_clear_env(monkeypatch):
    """Reset environment variables."""
    monkeypatch.delenv("MAILCHIMP_API_KEY", raising=False)
    monkeypatch.delenv("MAILCHIMP_API_KEY_FILE", raising=False)
    monkeypatch.delenv("MAILCHIMP_API_KEY_PATH", raising=False)


@pytest.fixture
def _mock_api_key_env(monkeypatch):
    """Set the API key in environment variable."""
    monkeypatch.setenv("MAILCHIMP_API_KEY", "env-api-key-us1")


@pytest.fixture
def _mock_api_key_file_env(monkeypatch):
    """Set the API key path in environment variable."""
    monkeypatch.setenv("MAILCHIMP_API_KEY_FILE", FILE_API_KEY_PATH)


def test_api_key_default():
    """Test call with no environment variable."""
    value = ApiKeyValue("default-api-key-us2", environ_prefix=None)
    assert value.setup("MAILCHIMP_API_KEY") == "default-api-key-us2"


@pytest.mark.usefixtures("_mock_api_key_env")
def test_api_key_in_env():
    """Test call with the API key environment variable."""
    value = ApiKeyValue(None, environ_prefix=None)
    assert value.setup("MAILCHIMP_API_KEY") == "env-api-key-us1"


@pytest.mark.usefixtures("_mock_api_key_env", "_mock_api_key_file_env")
def test_api_key_in_file():
    """The file has priority over the environment variable."""
    value = ApiKeyValue(None, environ_prefix=None)
    assert value.setup("MAILCHIMP_API_KEY") == "file-api-key-eu3"


def test_api_key_in_file_suffix(monkeypatch):
    """Test call with API key file environment variable and non default `file_suffix`."""
    monkeypatch.setenv("MAILCHIMP_API_KEY_PATH", FILE_API_KEY_PATH)
    value = ApiKeyValue(None, environ_prefix=None, file_suffix="PATH")
    assert value.setup("MAILCHIMP_API_KEY") == "file-api-key-eu3"


def test_api_key_missing_file(monkeypatch):
    """A file which does not exist is an error."""
    monkeypatch.setenv("MAILCHIMP_API_KEY_FILE", "/nonexistent/api_key")
    value = ApiKeyValue(None, environ_prefix=None)
    with pytest.raises(ValueError, match="does not exist"):
        value.setup("MAILCHIMP_API_KEY")


def test_api_key_without_datacenter(monkeypatch):
    """A key without its datacenter suffix is rejected."""
    monkeypatch.setenv("MAILCHIMP_API_KEY", "nodatacenter")
    value = ApiKeyValue(None, environ_prefix=None)
    with pytest.raises(ValueError, match="must end with its datacenter"):
        value.setup("MAILCHIMP_API_KEY")


def test_api_key_required():
    """A required key must be set."""
    value = ApiKeyValue(None, environ_prefix=None, environ_required=True)
    with pytest.raises(ValueError, match="Mailchimp API key 'MAILCHIMP_API_KEY' is required"):
        value.setup("MAILCHIMP_API_KEY")


def test_api_key_file_without_datacenter(tmp_path, monkeypatch):
    """A key read from a file is validated as well."""
    key_file = tmp_path / "api_key"
    key_file.write_text("nodatacenter\n")
    monkeypatch.setenv("MAILCHIMP_API_KEY_FILE", str(key_file))
    value = ApiKeyValue(None, environ_prefix=None)
    with pytest.raises(ValueError, match="must end with its datacenter"):
        value.setup("MAILCHIMP_API_KEY")
