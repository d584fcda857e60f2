"""Mailchimp client handler."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.functional import cached_property
from django.utils.module_loading import import_string

from mailchimp_lists.client import Mailchimp
from mailchimp_lists.exceptions import MailchimpInvalidApiClassError

DEFAULT_API_CLASS = "mailchimp_lists.api.MailchimpApi"
DEFAULT_TIMEOUT = 10


class MailchimpHandler:
    """Mailchimp handler managing the client instantiation."""

    def __init__(self, config=None):
        """Initialize the Mailchimp handler."""
        # config is an optional dict structured like settings.MAILCHIMP
        self._config = config
        self._mailchimp = None

    @cached_property
    def config(self):
        """Put in cache the client properties from the settings."""
        if self._config is None:
            config = getattr(settings, "MAILCHIMP", None)
            if not config:
                raise ImproperlyConfigured("settings.MAILCHIMP is not configured")
            self._config = config.copy()
        return self._config

    def __call__(self):
        """Create if not existing the client and then return it."""
        if self._mailchimp is None:
            self._mailchimp = self.create_mailchimp(self.config)
        return self._mailchimp

    def create_mailchimp(self, params):
        """Instantiate and configure the Mailchimp client."""
        params = params.copy()
        api_class = params.pop("API_CLASS", DEFAULT_API_CLASS)
        try:
            klass = import_string(api_class)
        except ImportError as e:
            raise MailchimpInvalidApiClassError(f"Could not find API class {api_class!r}: {e}") from e
        api = klass(params.get("API_KEY"), timeout=params.get("TIMEOUT", DEFAULT_TIMEOUT))
        return Mailchimp(api=api)
