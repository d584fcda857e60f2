"""Mailchimp exceptions module."""

from django.core.exceptions import ImproperlyConfigured


class MailchimpError(Exception):
    """Base exception for all Mailchimp exceptions."""


class MailchimpConfigurationError(MailchimpError, ImproperlyConfigured):
    """Exception raised when the API key is missing or invalid."""


class MailchimpInvalidApiClassError(MailchimpError):
    """Exception raised when the configured API class cannot be imported."""


class MailchimpConnectionError(MailchimpError):
    """Exception raised when the Mailchimp API cannot be reached."""


class MailchimpUnexpectedResponseError(MailchimpError):
    """Exception raised when a decoded response is missing an expected field."""


class MailchimpApiError(MailchimpError):
    """Exception raised when the Mailchimp API answers with an error status."""

    def __init__(self, message, status_code=None, body=None):
        """Keep the status code and the raw body for diagnostics."""
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MailchimpBadRequestError(MailchimpApiError):
    """Exception raised on 4xx responses."""


class MailchimpNotFoundError(MailchimpBadRequestError):
    """Exception raised when the requested resource does not exist."""


class MailchimpListNotFoundError(MailchimpBadRequestError):
    """Exception raised when a list scoped operation targets an unknown list."""


class MailchimpInternalError(MailchimpApiError):
    """Exception raised on 5xx responses."""
